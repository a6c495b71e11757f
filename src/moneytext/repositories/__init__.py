"""Data-access repositories."""
