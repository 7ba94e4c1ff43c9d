"""Ports the application layer needs from the outside world."""
