"""Greendex CLI - Main entry point."""
from greendex.cli.main import app, configure_logging, main

__all__ = ["app", "configure_logging", "main"]
