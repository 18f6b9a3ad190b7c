"""
Display formatting for token amounts and hashes.

Amounts are scaled with string arithmetic only; minimal-unit values can
exceed 64-bit range and must not pass through float.
"""


def format_token_amount(raw_value: str, decimals: int) -> str:
    """
    Convert a minimal-unit integer string into a human-readable decimal.

    Trailing fractional zeros are stripped. Empty input formats as "0";
    anything that is not an integer string is returned unchanged.

    Examples:
        format_token_amount("1000000", 6)   -> "1"
        format_token_amount("1500000", 6)   -> "1.5"
        format_token_amount("-25", 2)       -> "-0.25"
    """
    text = str(raw_value or "").strip()
    if not text:
        return "0"

    negative = text.startswith("-")
    digits = text[1:] if negative else text
    if not digits.isdigit():
        return text

    decimals = max(int(decimals), 0)
    padded = digits.rjust(decimals + 1, "0")
    whole = padded[:len(padded) - decimals].lstrip("0") or "0"
    fraction = padded[len(padded) - decimals:].rstrip("0") if decimals else ""

    value = f"{whole}.{fraction}" if fraction else whole
    if negative and value != "0":
        return f"-{value}"
    return value


def short_hash(value: str, length: int = 10) -> str:
    """Truncate a transaction hash for table display."""
    if not value:
        return "-"
    if len(value) <= length:
        return value
    return f"{value[:length]}..."
