"""Serial remote control for Nikon F90x / N90s cameras."""

__version__ = "0.1.0"
