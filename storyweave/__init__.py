"""PyStoryWeave: macro-driven story markup renderer."""

__version__ = "0.3.0"
