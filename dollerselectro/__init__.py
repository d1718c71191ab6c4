"""DollersElectro storefront client."""

__version__ = "0.1.0"
