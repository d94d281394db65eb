"""Calendar core and API client for the group event planning app."""

__version__ = "0.1.0"
