"""Sinks for generated decision documents."""
