"""Services Layer: operation handlers for credentials, posts and users.

Invariants:
    - Handlers take a RequestIdentity and a store; they never see HTTP or GraphQL
    - Every protected handler starts with auth_check()

Design Decisions:
    - One handler file per resource for locality
"""
