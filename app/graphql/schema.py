"""
Schéma GraphQL du clone Hacker News.

Les resolvers ne font que construire les arguments typés et déléguer aux
services, qui reçoivent le contexte de requête explicitement. Les services
sont synchrones (SQLAlchemy, bcrypt) : ils tournent dans le threadpool pour
ne jamais bloquer la boucle asyncio.
"""

from typing import AsyncGenerator, List, Optional

import strawberry
from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from app.graphql.types import AuthPayload, CommentType, LinkType, UserType
from app.schemas.comment import CommentCreate
from app.schemas.link import FeedArgs, LinkCreate
from app.schemas.user import LoginRequest, UserCreate
from app.services import auth_service, comment_service, link_service
from app.services.validators import parse_args


@strawberry.type
class Query:
    @strawberry.field
    def hello(self) -> str:
        return "Hello World!"

    @strawberry.field
    async def feed(
        self,
        info: Info,
        filter_needle: Optional[str] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None
    ) -> List[LinkType]:
        args = parse_args(FeedArgs, filter_needle=filter_needle, skip=skip, take=take)
        links = await run_in_threadpool(link_service.feed, info.context.request_context, args)
        return [LinkType.from_record(link) for link in links]

    @strawberry.field
    async def link(self, info: Info, id: strawberry.ID) -> Optional[LinkType]:
        link = await run_in_threadpool(link_service.get_link, info.context.request_context, id)
        return LinkType.from_record(link) if link else None

    @strawberry.field
    async def comment(self, info: Info, id: strawberry.ID) -> Optional[CommentType]:
        comment = await run_in_threadpool(comment_service.get_comment, info.context.request_context, id)
        return CommentType.from_record(comment) if comment else None

    @strawberry.field
    def me(self, info: Info) -> UserType:
        # pas d'I/O : le user courant est déjà dans le contexte
        return UserType.from_record(auth_service.me(info.context.request_context))


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def post_link(self, info: Info, url: str, description: str) -> LinkType:
        args = parse_args(LinkCreate, url=url, description=description)
        link = await run_in_threadpool(link_service.post_link, info.context.request_context, args)
        return LinkType.from_record(link)

    @strawberry.mutation
    async def post_comment_on_link(self, info: Info, link_id: strawberry.ID, body: str) -> CommentType:
        args = parse_args(CommentCreate, link_id=link_id, body=body)
        comment = await run_in_threadpool(comment_service.post_comment_on_link, info.context.request_context, args)
        return CommentType.from_record(comment)

    @strawberry.mutation
    async def signup(self, info: Info, email: str, password: str, name: str) -> AuthPayload:
        args = parse_args(UserCreate, email=email, password=password, name=name)
        token, user = await run_in_threadpool(auth_service.signup, info.context.request_context, args)
        return AuthPayload(token=token, user=UserType.from_record(user))

    @strawberry.mutation
    async def login(self, info: Info, email: str, password: str) -> AuthPayload:
        args = parse_args(LoginRequest, email=email, password=password)
        token, user = await run_in_threadpool(auth_service.login, info.context.request_context, args)
        return AuthPayload(token=token, user=UserType.from_record(user))


@strawberry.type
class Subscription:
    @strawberry.subscription
    async def new_link(self, info: Info) -> AsyncGenerator[LinkType, None]:
        async for link in link_service.new_link_stream(info.context.request_context):
            yield LinkType.from_record(link)


schema = strawberry.Schema(query=Query, mutation=Mutation, subscription=Subscription)
