"""Infrastructure adapters: persistence, security, logging, events, clock."""
