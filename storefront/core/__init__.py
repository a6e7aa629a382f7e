"""Core infrastructure: configuration, storage, cart store."""
