"""Command-line interface for chait."""

from .app import app, main

__all__ = ["app", "main"]
