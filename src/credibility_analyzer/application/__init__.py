"""Application use-cases."""
