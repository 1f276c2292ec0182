"""Report Go module dependencies by their accumulated on-disk size."""

__version__ = "0.1.0"
