"""Constants and mathematical utilities."""
