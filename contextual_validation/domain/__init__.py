"""Domain layer for contextual validation."""
