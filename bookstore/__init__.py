"""Bookstore catalog API with JWT authentication and role-gated writes."""

__version__ = "1.0.0"
