"""Infrastructure Layer: database, storage, uploads, sessions and logging.

Invariants:
    - Infrastructure failures are mapped to core.errors types before leaving this layer
"""
