"""
Logging Utilities - Credential masking for request logs.

API keys travel as a query parameter (Etherscan) or a bearer header
(Covalent); neither may reach the logs in clear text.
"""

from typing import Any, Dict, Optional


SENSITIVE_PARAMS = frozenset({"apikey", "api_key", "key", "token"})
SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key"})


def mask_value(value: str, show_chars: int = 4) -> str:
    """
    Mask a sensitive value, showing only first few chars.

    Args:
        value: Value to mask
        show_chars: Number of chars to show at start

    Returns:
        Masked value
    """
    if not value or len(value) <= show_chars:
        return "***"
    return f"{value[:show_chars]}...***"


def mask_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Mask sensitive query parameters."""
    if not params:
        return {}
    return {
        key: mask_value(str(value)) if key.lower() in SENSITIVE_PARAMS and value else value
        for key, value in params.items()
    }


def mask_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Mask sensitive headers."""
    if not headers:
        return {}
    return {
        key: mask_value(str(value)) if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }
