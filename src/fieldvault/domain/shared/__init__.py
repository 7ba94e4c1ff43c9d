"""Shared kernel of the domain layer."""
