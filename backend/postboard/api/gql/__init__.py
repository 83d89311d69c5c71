"""GraphQL API: strawberry schema, types and request context.

Invariants:
    - The router is mounted explicitly in main.py at /graphql
"""
