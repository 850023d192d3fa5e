"""Quick categorized note logging with tags, projects, search, and JSON/Markdown export."""

__version__ = "0.0.3"
__all__ = ["__version__"]