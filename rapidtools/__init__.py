"""Text search, directory listing and log tailing tools."""

__version__ = "0.1.0"