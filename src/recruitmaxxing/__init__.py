"""Recruiting intelligence extraction from job descriptions."""

__version__ = "0.1.0"
