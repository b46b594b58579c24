"""Render JSON:API documentation documents into a tree of static HTML files."""

__version__ = "0.1.0"
