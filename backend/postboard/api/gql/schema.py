"""GraphQL Schema: root query/mutation resolvers bound to the service handlers.

Invariants:
    - Resolvers are thin: open a store, call one handler, shape the result
    - Each resolver opens its own store session (sibling query fields run concurrently)
    - Resolvers never format errors; PostboardGraphQLRouter renders them

Design Decisions:
    - Strawberry code-first schema: types and resolvers live next to each other
    - Field names follow the client contract (camelCase, _id) via strawberry's
      auto camel-casing and explicit names
"""

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from postboard.api.error_handlers import format_graphql_error, log_graphql_error
from postboard.api.gql.context import GraphQLContext, get_context
from postboard.api.gql.types import (
    AuthData, PostData, PostInput, PostType, UserInput, UserType,
)
from postboard.core.format_payloads import (
    format_post, format_post_page, format_user,
)
from postboard.services import credentials, handle_posts, handle_users

GraphQLInfo = Info[GraphQLContext, None]


@strawberry.type
class Query:

    @strawberry.field
    async def login(self, info: GraphQLInfo, email: str, password: str) -> AuthData:
        async with info.context.open_store() as store:
            result = await credentials.authenticate(store.users, email, password)
        return AuthData(token=result.token, user_id=result.user_id)

    @strawberry.field
    async def posts(self, info: GraphQLInfo, page: int | None = None) -> PostData:
        ctx = info.context
        async with ctx.open_store() as store:
            items, total = await handle_posts.list_posts(
                ctx.identity, store, page, ctx.settings.posts_per_page,
            )
            return PostData.from_payload(format_post_page(items, total))

    @strawberry.field
    async def post(self, info: GraphQLInfo, id: strawberry.ID) -> PostType:
        ctx = info.context
        async with ctx.open_store() as store:
            found = await handle_posts.get_post(ctx.identity, store, id)
            return PostType.from_payload(format_post(found))

    @strawberry.field
    async def user(self, info: GraphQLInfo) -> UserType:
        ctx = info.context
        async with ctx.open_store() as store:
            profile = await handle_users.get_profile(ctx.identity, store)
            return UserType.from_payload(format_user(profile))


@strawberry.type
class Mutation:

    @strawberry.mutation
    async def create_user(self, info: GraphQLInfo, user_input: UserInput) -> UserType:
        async with info.context.open_store() as store:
            user = await credentials.register(
                store.users, user_input.email, user_input.password, user_input.name,
            )
            return UserType.from_payload(format_user(user))

    @strawberry.mutation
    async def create_post(self, info: GraphQLInfo, post_input: PostInput) -> PostType:
        ctx = info.context
        async with ctx.open_store() as store:
            post = await handle_posts.create_post(
                ctx.identity, store,
                post_input.title, post_input.content, post_input.image_url,
            )
            return PostType.from_payload(format_post(post))

    @strawberry.mutation
    async def update_post(
        self, info: GraphQLInfo, id: strawberry.ID, post_input: PostInput,
    ) -> PostType:
        ctx = info.context
        async with ctx.open_store() as store:
            post = await handle_posts.update_post(
                ctx.identity, store, id,
                post_input.title, post_input.content, post_input.image_url,
            )
            return PostType.from_payload(format_post(post))

    @strawberry.mutation
    async def delete_post(self, info: GraphQLInfo, id: strawberry.ID) -> bool:
        ctx = info.context
        async with ctx.open_store() as store:
            return await handle_posts.delete_post(ctx.identity, store, ctx.media, id)

    @strawberry.mutation
    async def update_status(self, info: GraphQLInfo, status: str) -> UserType:
        ctx = info.context
        async with ctx.open_store() as store:
            user = await handle_users.update_status(ctx.identity, store, status)
            return UserType.from_payload(format_user(user))


class PostboardSchema(strawberry.Schema):
    """Schema that logs errors through the shared boundary."""

    def process_errors(self, errors, execution_context=None) -> None:
        for error in errors:
            log_graphql_error(error)


schema = PostboardSchema(query=Query, mutation=Mutation)


class PostboardGraphQLRouter(GraphQLRouter):
    """GraphQL endpoint rendering errors as {message, status, data?} envelopes."""

    async def process_result(self, request, result) -> dict:
        response: dict = {"data": result.data}
        if result.errors:
            response["errors"] = [format_graphql_error(e) for e in result.errors]
        return response


def create_graphql_router(graphiql: bool = True) -> GraphQLRouter:
    return PostboardGraphQLRouter(
        schema,
        path="/graphql",
        context_getter=get_context,
        graphql_ide="graphiql" if graphiql else None,
    )
