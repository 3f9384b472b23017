"""podgrab - download every episode of a podcast feed into a local folder."""

__version__ = "0.1.0"
