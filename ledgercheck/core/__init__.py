"""Core - settings and logging."""
