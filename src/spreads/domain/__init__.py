"""Domain layer - pure models with no external dependencies."""
