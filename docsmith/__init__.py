"""docsmith: normalized documentation builder."""

__version__ = "1.0.0"
