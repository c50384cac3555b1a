"""Core infrastructure: configuration, logging, nested paths."""
