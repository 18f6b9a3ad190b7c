"""
Providers package - Token transfer provider implementations.
"""

from transfer_adapters.providers.covalent import CovalentProvider
from transfer_adapters.providers.etherscan import EtherscanProvider


__all__ = [
    "CovalentProvider",
    "EtherscanProvider",
]
