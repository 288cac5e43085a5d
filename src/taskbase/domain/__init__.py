"""Domain layer - entities and business services."""
