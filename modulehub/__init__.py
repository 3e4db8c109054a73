"""modulehub: faceted browser for a catalog of infrastructure modules."""

__version__ = "1.0.0"
