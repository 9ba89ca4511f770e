"""Cache entries and the LRU/TTL policy core."""
