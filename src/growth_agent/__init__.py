"""Podcast growth plan service: parallel agents over one transcript."""

__version__ = "0.1.0"
