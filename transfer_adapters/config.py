"""
Transfer Fetch Configuration - Provider credentials.

Credentials are loaded from environment variables (optionally via a .env
file) once at startup and then passed explicitly to the fetcher. Their
presence alone decides which provider is used.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


ETHERSCAN_API_KEY_ENV = "ETHERSCAN_API_KEY"
COVALENT_API_KEY_ENV = "COVALENT_API_KEY"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class TransferFetchConfig:
    """Immutable provider credentials. Blank keys count as absent."""
    etherscan_api_key: Optional[str] = None
    covalent_api_key: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "etherscan_api_key", _clean(self.etherscan_api_key))
        object.__setattr__(self, "covalent_api_key", _clean(self.covalent_api_key))

    @property
    def has_etherscan_key(self) -> bool:
        return self.etherscan_api_key is not None

    @property
    def has_covalent_key(self) -> bool:
        return self.covalent_api_key is not None

    @property
    def has_any_api_key(self) -> bool:
        return self.has_etherscan_key or self.has_covalent_key

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_env_file: bool = True,
    ) -> "TransferFetchConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            load_env_file: Load a .env file into os.environ first
        """
        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = os.environ

        config = cls(
            etherscan_api_key=environ.get(ETHERSCAN_API_KEY_ENV),
            covalent_api_key=environ.get(COVALENT_API_KEY_ENV),
        )
        logger.debug(
            f"Loaded transfer config: etherscan={config.has_etherscan_key}, "
            f"covalent={config.has_covalent_key}"
        )
        return config

    def to_dict(self) -> dict[str, bool]:
        """Credential presence only; key values are never exported."""
        return {
            "etherscan_configured": self.has_etherscan_key,
            "covalent_configured": self.has_covalent_key,
        }


# Singleton instance, read once per process
_default_config: Optional[TransferFetchConfig] = None


def get_default_config() -> TransferFetchConfig:
    """Get or load the process-wide configuration."""
    global _default_config
    if _default_config is None:
        _default_config = TransferFetchConfig.from_env()
    return _default_config


def set_default_config(config: Optional[TransferFetchConfig]) -> None:
    """Replace the process-wide configuration (None forces a reload)."""
    global _default_config
    _default_config = config
