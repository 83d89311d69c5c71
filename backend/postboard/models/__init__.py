"""ORM Models: SQLAlchemy declarative models for users and posts.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is the aggregate root; posts are scoped by creator_id

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from postboard.models.user import User  # noqa: F401
from postboard.models.post import Post  # noqa: F401
