"""API fixtures: GraphQL request helper and bearer tokens."""

import pytest

from postboard.infrastructure.security import issue_token


@pytest.fixture
def gql(client):
    """POST a GraphQL document, optionally with a bearer token."""

    async def _send(query: str, variables: dict | None = None, token: str | None = None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = await client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        return response.json()

    return _send


@pytest.fixture
def alice_token(alice):
    return issue_token(alice.id, alice.email)


@pytest.fixture
def bob_token(bob):
    return issue_token(bob.id, bob.email)
