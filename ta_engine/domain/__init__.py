"""Domain layer: technical-analysis calculations."""
