"""Serialization of assignment runs."""

from .formatter import auto_assignment_to_csv, auto_assignment_to_json, persist_auto_assignment

__all__ = ["auto_assignment_to_csv", "auto_assignment_to_json", "persist_auto_assignment"]
