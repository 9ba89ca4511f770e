"""Concurrency helpers shared by the cache core."""
