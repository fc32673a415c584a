"""Application layer: command handlers and access-control services."""
