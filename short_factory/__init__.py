"""Short Factory - narration text in, finished short video out."""

__version__ = "1.0.0"
