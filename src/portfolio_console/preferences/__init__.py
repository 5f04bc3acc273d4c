"""Persisted user preferences (colour theme)."""
