"""Gslb resource model, strategy validation, spec resolution and DNS endpoint computation."""

__version__ = "0.1.0"
__all__ = ["api", "validator", "depresolver", "dnsupdate"]