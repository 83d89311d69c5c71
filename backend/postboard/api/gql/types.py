"""GraphQL Types: public shapes of users, posts and auth results.

Only exposes safe fields: the password hash has no GraphQL field.
Instances are built from core/format_payloads.py dicts, so ids are
already strings and timestamps ISO 8601.
"""

import strawberry


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID = strawberry.field(name="_id")
    name: str
    email: str
    status: str
    posts: list["PostType"]

    @classmethod
    def from_payload(cls, payload: dict) -> "UserType":
        return cls(
            id=strawberry.ID(payload["id"]),
            name=payload["name"],
            email=payload["email"],
            status=payload["status"],
            posts=[PostType.from_payload(p) for p in payload["posts"]],
        )


@strawberry.type(name="Post")
class PostType:
    id: strawberry.ID = strawberry.field(name="_id")
    title: str
    content: str
    image_url: str
    creator: UserType
    created_at: str
    updated_at: str

    @classmethod
    def from_payload(cls, payload: dict) -> "PostType":
        return cls(
            id=strawberry.ID(payload["id"]),
            title=payload["title"],
            content=payload["content"],
            image_url=payload["image_url"],
            creator=UserType.from_payload(payload["creator"]),
            created_at=payload["created_at"],
            updated_at=payload["updated_at"],
        )


@strawberry.type(name="AuthData")
class AuthData:
    token: str
    user_id: str


@strawberry.type(name="PostData")
class PostData:
    posts: list[PostType]
    total_posts: int

    @classmethod
    def from_payload(cls, payload: dict) -> "PostData":
        return cls(
            posts=[PostType.from_payload(p) for p in payload["posts"]],
            total_posts=payload["total_posts"],
        )


@strawberry.input(name="UserInputData")
class UserInput:
    email: str
    name: str
    password: str


@strawberry.input(name="PostInputData")
class PostInput:
    title: str
    content: str
    image_url: str | None = None
