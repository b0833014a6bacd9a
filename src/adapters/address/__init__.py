"""Address verification adapters."""

from .smarty import SmartyAddressVerifier

__all__ = ["SmartyAddressVerifier"]
