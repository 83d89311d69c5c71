"""GraphQL endpoint: end-to-end flows and the error envelope.

Tests cover:
    - createUser -> login -> createPost -> posts -> deletePost
    - unauthenticated calls -> 401 envelope, data null
    - invalid input -> 422 envelope with a data list
    - non-owner mutation -> 403 envelope
    - malformed query -> 400 envelope
"""

CREATE_USER = """
mutation ($input: UserInputData!) {
  createUser(userInput: $input) { _id email name status posts { _id } }
}
"""

LOGIN = """
query ($email: String!, $password: String!) {
  login(email: $email, password: $password) { token userId }
}
"""

CREATE_POST = """
mutation ($input: PostInputData!) {
  createPost(postInput: $input) {
    _id title content imageUrl createdAt updatedAt creator { _id name }
  }
}
"""

UPDATE_POST = """
mutation ($id: ID!, $input: PostInputData!) {
  updatePost(id: $id, postInput: $input) { _id title imageUrl }
}
"""

DELETE_POST = "mutation ($id: ID!) { deletePost(id: $id) }"

POSTS = """
query ($page: Int) {
  posts(page: $page) { totalPosts posts { _id title creator { name } } }
}
"""

POST_INPUT = {
    "title": "First post",
    "content": "Some content here",
    "imageUrl": "images/first.png",
}


async def _create_post(gql, token, **overrides):
    result = await gql(CREATE_POST, {"input": {**POST_INPUT, **overrides}}, token)
    return result["data"]["createPost"]


async def test_signup_login_and_post_flow(gql):
    created = await gql(CREATE_USER, {"input": {
        "email": "ada@postboard.io", "name": "Ada", "password": "secret-pw",
    }})
    user = created["data"]["createUser"]
    assert user["status"] == "I am new!"
    assert user["posts"] == []
    assert "password" not in user

    login = await gql(LOGIN, {"email": "ada@postboard.io", "password": "secret-pw"})
    auth = login["data"]["login"]
    assert auth["userId"] == user["_id"]

    post = await _create_post(gql, auth["token"])
    assert post["creator"]["_id"] == user["_id"]
    assert post["createdAt"] == post["updatedAt"]

    listing = await gql(POSTS, {"page": 1}, auth["token"])
    assert listing["data"]["posts"]["totalPosts"] == 1
    assert listing["data"]["posts"]["posts"][0]["_id"] == post["_id"]


async def test_create_user_duplicate_email_conflicts(gql, alice):
    result = await gql(CREATE_USER, {"input": {
        "email": alice.email, "name": "Copy", "password": "secret-pw",
    }})
    assert result["data"] is None
    assert result["errors"][0]["status"] == 409
    assert result["errors"][0]["message"] == "User exists already!"


async def test_create_user_invalid_input_lists_violations(gql):
    result = await gql(CREATE_USER, {"input": {
        "email": "not-an-email", "name": "Ada", "password": "abc",
    }})
    error = result["errors"][0]
    assert error["status"] == 422
    assert error["message"] == "Invalid input!"
    assert error["data"] == [
        {"message": "Email is invalid."},
        {"message": "Password too short."},
    ]


async def test_login_wrong_password_unauthorized(gql, alice):
    result = await gql(LOGIN, {"email": alice.email, "password": "wrong-pw"})
    assert result["data"] is None
    assert result["errors"][0]["status"] == 401


async def test_create_post_without_token_unauthorized(gql):
    result = await gql(CREATE_POST, {"input": POST_INPUT})
    assert result["data"] is None
    assert result["errors"][0] == {
        "message": "Not authenticated!",
        "status": 401,
        "locations": result["errors"][0]["locations"],
        "path": ["createPost"],
    }


async def test_garbage_token_treated_as_anonymous(gql):
    result = await gql(POSTS, {}, token="not.a.jwt")
    assert result["errors"][0]["status"] == 401


async def test_update_post_by_non_owner_forbidden(gql, alice_token, bob_token):
    post = await _create_post(gql, alice_token)
    result = await gql(UPDATE_POST, {
        "id": post["_id"],
        "input": {**POST_INPUT, "title": "Hijacked title"},
    }, bob_token)
    assert result["errors"][0]["status"] == 403


async def test_update_post_placeholder_keeps_image(gql, alice_token):
    post = await _create_post(gql, alice_token)
    result = await gql(UPDATE_POST, {
        "id": post["_id"],
        "input": {**POST_INPUT, "title": "Renamed post", "imageUrl": "undefined"},
    }, alice_token)
    updated = result["data"]["updatePost"]
    assert updated["title"] == "Renamed post"
    assert updated["imageUrl"] == "images/first.png"


async def test_delete_post_then_missing(gql, alice_token):
    post = await _create_post(gql, alice_token)
    deleted = await gql(DELETE_POST, {"id": post["_id"]}, alice_token)
    assert deleted["data"]["deletePost"] is True

    again = await gql(DELETE_POST, {"id": post["_id"]}, alice_token)
    assert again["errors"][0]["status"] == 404


async def test_post_malformed_id_not_found(gql, alice_token):
    result = await gql(
        "query { post(id: \"123\") { _id } }", token=alice_token,
    )
    assert result["errors"][0]["status"] == 404


async def test_posts_pagination(gql, alice_token):
    for i in range(3):
        await _create_post(gql, alice_token, title=f"Post number {i + 1}")

    first = await gql(POSTS, {"page": 1}, alice_token)
    second = await gql(POSTS, {"page": 2}, alice_token)

    assert first["data"]["posts"]["totalPosts"] == 3
    assert len(first["data"]["posts"]["posts"]) == 2
    assert len(second["data"]["posts"]["posts"]) == 1
    ids = {p["_id"] for p in first["data"]["posts"]["posts"]}
    assert second["data"]["posts"]["posts"][0]["_id"] not in ids


async def test_user_query_and_status_update(gql, alice_token):
    await _create_post(gql, alice_token)
    updated = await gql(
        "mutation { updateStatus(status: \"Busy writing\") { status } }",
        token=alice_token,
    )
    assert updated["data"]["updateStatus"]["status"] == "Busy writing"

    result = await gql(
        "query { user { name status posts { title creator { name } } } }",
        token=alice_token,
    )
    user = result["data"]["user"]
    assert user["status"] == "Busy writing"
    assert user["posts"][0]["creator"]["name"] == "Alice"


async def test_unknown_field_is_bad_request(gql, alice_token):
    result = await gql("query { nothingHere }", token=alice_token)
    assert result["errors"][0]["status"] == 400
