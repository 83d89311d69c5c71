"""Core Layer: pure domain rules, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validation, payload shaping and identity checks are pure functions

Design Decisions:
    - Functional core separated from the imperative shell (services/, api/)
"""
