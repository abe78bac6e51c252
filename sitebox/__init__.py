"""sitebox - provision local development sites."""

__version__ = "0.1.0"
