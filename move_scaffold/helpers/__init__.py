"""Shared helpers: console logging, configuration, YAML I/O, naming."""
