"""lanemark — lifecycle markers for free-form task titles."""

__version__ = "0.1.0"
