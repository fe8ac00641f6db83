"""Catalog Host - paginated catalog data access and service layer."""

__version__ = "0.1.0"
