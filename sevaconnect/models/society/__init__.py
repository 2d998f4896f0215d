"""Society models."""
