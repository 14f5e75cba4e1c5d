"""Core Layer: error hierarchy, domain types, password hashing, boundary protocols.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - No IO besides bcrypt's CPU work
"""
