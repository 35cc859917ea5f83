"""Version information for gleam-packages-mcp."""

__version__ = "0.1.0"
