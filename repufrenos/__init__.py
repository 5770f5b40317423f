"""REPUFRENOS.CL storefront and vehicle service tracker."""

__version__ = "1.0.0"
