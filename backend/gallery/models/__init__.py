"""ORM Models: SQLAlchemy declarative models for the three gallery tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - No model references another (no foreign keys)

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from gallery.models.invitation import Invitation  # noqa: F401
from gallery.models.admin_user import AdminUser  # noqa: F401
from gallery.models.setting import Setting  # noqa: F401
