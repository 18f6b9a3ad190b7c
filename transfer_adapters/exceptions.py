"""
Transfer Adapter Exceptions - Custom exception hierarchy.

Every failure surfaced by the fetch layer derives from TransferAdapterError
so the presentation layer can catch one type and show it verbatim.
"""

from datetime import datetime, timezone
from typing import Any, Optional


class TransferAdapterError(Exception):
    """Base exception for all transfer adapter errors."""

    def __init__(
        self,
        message: str,
        adapter_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.adapter_name = adapter_name
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "adapter_name": self.adapter_name,
            "original_error": str(self.original_error) if self.original_error else None,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.adapter_name:
            parts.append(f"[adapter={self.adapter_name}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


class ConfigurationError(TransferAdapterError):
    """A required credential is not configured."""

    def __init__(
        self,
        message: str,
        adapter_name: Optional[str] = None,
        config_key: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, adapter_name, original_error)
        self.config_key = config_key

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["config_key"] = self.config_key
        return data


class TransportError(TransferAdapterError):
    """
    HTTP call failed.

    status_code is None for network-level failures (DNS, connection reset,
    timeout). For HTTP failures response_body holds the body text verbatim.
    """

    def __init__(
        self,
        message: str,
        adapter_name: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        request_url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, adapter_name, original_error)
        self.status_code = status_code
        self.response_body = response_body
        self.request_url = request_url

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data.update({
            "status_code": self.status_code,
            "response_body": self.response_body,
            "request_url": self.request_url,
        })
        return data


class ProviderError(TransferAdapterError):
    """Provider answered at the transport level but reported a data-level problem."""

    def __init__(
        self,
        message: str,
        adapter_name: Optional[str] = None,
        provider_message: Optional[str] = None,
        payload_detail: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, adapter_name, original_error)
        self.provider_message = provider_message
        self.payload_detail = payload_detail

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data.update({
            "provider_message": self.provider_message,
            "payload_detail": self.payload_detail,
        })
        return data


class NormalizationError(TransferAdapterError):
    """Error during raw record normalization."""

    def __init__(
        self,
        message: str,
        adapter_name: Optional[str] = None,
        raw_data: Optional[Any] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, adapter_name, original_error)
        self.raw_data = raw_data

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["raw_data"] = str(self.raw_data)[:500] if self.raw_data is not None else None
        return data
