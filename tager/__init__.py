"""tager - a tag graph for organizing files."""

__version__ = "0.1.0"
