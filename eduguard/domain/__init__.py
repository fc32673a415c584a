"""Domain layer: entities, enums, events, policies and ports.

No framework or infrastructure imports are allowed here.
"""
