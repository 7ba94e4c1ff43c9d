"""Infrastructure layer: persistence, cryptography and identity adapters."""
