"""Pull-request driven semantic-version release tagging."""

__version__ = "0.4.0"
