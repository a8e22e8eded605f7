"""rlocate - locate files on the local filesystem from a prebuilt index."""

__version__ = "0.1.0"
