"""Persistent storage for rendered videos and stored images."""
