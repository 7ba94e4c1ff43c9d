"""Security domain: envelopes, key resolution and field encryption."""
