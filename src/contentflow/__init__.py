"""contentflow - permission-checked publish and archive workflow for content."""

__version__ = "0.1.0"
