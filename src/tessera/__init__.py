"""Tessera: user registration, login and stateless token authentication."""

__version__ = "1.0.0"
