"""Run artifact storage."""
