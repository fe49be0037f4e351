"""Shopping bag, pricing and checkout core for the rental storefront."""

__version__ = "1.0.0"
