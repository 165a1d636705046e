"""Blogpad: a small tag-filtered note/blog manager."""

__version__ = "0.1.0"
