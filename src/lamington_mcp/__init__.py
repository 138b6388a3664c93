"""Lamington Parts MCP - Component sourcing for a legacy electronics market."""

__version__ = "0.1.0"
