"""Terminal weather library: API client, settings, credentials and terminal views."""

__version__ = "0.1.0"