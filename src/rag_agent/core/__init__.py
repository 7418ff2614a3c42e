"""Core package - configuration."""
