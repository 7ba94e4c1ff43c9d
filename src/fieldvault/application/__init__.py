"""Application layer: commands orchestrating the domain."""
