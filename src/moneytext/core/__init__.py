"""Core utilities: errors, exceptions and logging."""
