"""HTTP layer for the validation service."""
