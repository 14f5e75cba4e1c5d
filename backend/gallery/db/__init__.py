"""Database primitives: declarative Base and a standalone async session factory."""
