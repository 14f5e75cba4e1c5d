"""Invitation Gallery: catalog API for invitation cards with an admin back office.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
