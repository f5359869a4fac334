"""Command-line client for the Obsidian Local REST API plugin."""

__version__ = "0.1.2"
