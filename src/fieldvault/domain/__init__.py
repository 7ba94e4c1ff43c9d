"""Domain layer: banking records and the security primitives protecting them."""
