"""Core of beeminder-cli: configuration, domain and services."""

__version__ = "0.1.0"
