"""API Layer: GraphQL endpoint, upload/health routes, guard and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every failure leaves through error_handlers.py as {message, status, data?}

Design Decisions:
    - Thin routes and resolvers delegate to services/
"""
