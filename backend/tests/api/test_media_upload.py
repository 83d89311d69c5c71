"""PUT /post-image: authenticated image upload."""

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


async def test_upload_requires_authentication(client):
    response = await client.put(
        "/post-image", files={"image": ("a.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 401
    assert response.json() == {"message": "Not authenticated!", "status": 401}


async def test_upload_without_file(client, alice_token):
    response = await client.put("/post-image", headers=_auth(alice_token))
    assert response.status_code == 200
    assert response.json() == {"message": "No file provided!"}


async def test_upload_unsupported_type(client, media, alice_token):
    response = await client.put(
        "/post-image",
        files={"image": ("a.gif", b"GIF89a", "image/gif")},
        headers=_auth(alice_token),
    )
    assert response.status_code == 200
    assert response.json() == {"message": "No file provided!"}
    assert not media.directory.exists() or not any(media.directory.iterdir())


async def test_upload_stores_png(client, media, alice_token):
    response = await client.put(
        "/post-image",
        files={"image": ("photo.png", PNG_BYTES, "image/png")},
        headers=_auth(alice_token),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "File stored."
    assert body["filePath"].startswith("images/")
    assert body["filePath"].endswith(".png")
    assert "\\" not in body["filePath"]
    stored = media.root / body["filePath"]
    assert stored.read_bytes() == PNG_BYTES


async def test_upload_clears_old_path(client, media, alice_token):
    media.ensure_directory()
    old = media.directory / "old.jpg"
    old.write_bytes(b"jpg")

    response = await client.put(
        "/post-image",
        files={"image": ("new.jpeg", b"jpeg", "image/jpeg")},
        data={"oldPath": "images/old.jpg"},
        headers=_auth(alice_token),
    )
    assert response.status_code == 201
    assert not old.exists()


async def test_upload_with_missing_old_path_still_stores(client, alice_token):
    response = await client.put(
        "/post-image",
        files={"image": ("new.png", PNG_BYTES, "image/png")},
        data={"oldPath": "images/gone.png"},
        headers=_auth(alice_token),
    )
    assert response.status_code == 201


async def _upload(client, token, name="photo.png", old_path=None):
    response = await client.put(
        "/post-image",
        files={"image": (name, PNG_BYTES, "image/png")},
        data={"oldPath": old_path} if old_path else {},
        headers=_auth(token),
    )
    return response.json()["filePath"]


async def test_stored_image_served_until_post_deleted(client, gql, alice_token):
    file_path = await _upload(client, alice_token)

    served = await client.get(f"/{file_path}")
    assert served.status_code == 200
    assert served.content == PNG_BYTES

    created = await gql(
        "mutation ($input: PostInputData!) { createPost(postInput: $input) { _id } }",
        {"input": {"title": "With image", "content": "Some content here",
                   "imageUrl": file_path}},
        alice_token,
    )
    post_id = created["data"]["createPost"]["_id"]
    deleted = await gql(
        "mutation ($id: ID!) { deletePost(id: $id) }", {"id": post_id}, alice_token,
    )
    assert deleted["data"]["deletePost"] is True

    gone = await client.get(f"/{file_path}")
    assert gone.status_code == 404
    assert gone.json()["status"] == 404


async def test_unknown_image_not_found(client):
    response = await client.get("/images/missing.png")
    assert response.status_code == 404


async def test_upload_keeps_other_users_image(client, gql, media, alice_token, bob_token):
    alice_path = await _upload(client, alice_token)
    await gql(
        "mutation ($input: PostInputData!) { createPost(postInput: $input) { _id } }",
        {"input": {"title": "Alice image", "content": "Some content here",
                   "imageUrl": alice_path}},
        alice_token,
    )

    await _upload(client, bob_token, old_path=alice_path)

    assert (media.root / alice_path).exists()
    assert (await client.get(f"/{alice_path}")).status_code == 200
