"""Configuration models for building caches."""
