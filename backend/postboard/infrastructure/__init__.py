"""Infrastructure Layer: database sessions, tokens, media files and logging.

Invariants:
    - Infrastructure never imports domain logic from services/
    - Failures surface as typed PostboardError subclasses

Design Decisions:
    - Thin wrappers over SQLAlchemy, PyJWT, passlib and aiofiles
"""
