"""Temperature Alert Setup — provisioning wizard for the temperature-alert skill."""

__version__ = "0.1.0"
