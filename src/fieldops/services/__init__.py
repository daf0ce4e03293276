"""Assignment services."""
