"""Types GraphQL exposés au client"""

from datetime import datetime
from typing import List, Optional

import strawberry
from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from app.schemas.comment import CommentResponse
from app.schemas.link import LinkResponse
from app.schemas.user import UserResponse
from app.services import auth_service, comment_service, link_service


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    name: str
    email: str

    @classmethod
    def from_record(cls, user: UserResponse) -> "UserType":
        return cls(id=strawberry.ID(str(user.id)), name=user.name, email=user.email)


@strawberry.type(name="Link")
class LinkType:
    id: strawberry.ID
    url: str
    description: str
    posted_by_id: Optional[strawberry.ID]
    created_at: datetime

    @classmethod
    def from_record(cls, link: LinkResponse) -> "LinkType":
        return cls(
            id=strawberry.ID(str(link.id)),
            url=link.url,
            description=link.description,
            posted_by_id=strawberry.ID(str(link.posted_by_id)) if link.posted_by_id is not None else None,
            created_at=link.created_at
        )

    @strawberry.field
    async def posted_by(self, info: Info) -> Optional[UserType]:
        user_id = int(self.posted_by_id) if self.posted_by_id is not None else None
        user = await run_in_threadpool(auth_service.find_user, info.context.request_context, user_id)
        return UserType.from_record(user) if user else None

    @strawberry.field
    async def comments(self, info: Info) -> List["CommentType"]:
        comments = await run_in_threadpool(comment_service.comments_for_link, info.context.request_context, int(self.id))
        return [CommentType.from_record(c) for c in comments]


@strawberry.type(name="Comment")
class CommentType:
    id: strawberry.ID
    body: str
    link_id: strawberry.ID
    created_at: datetime

    @classmethod
    def from_record(cls, comment: CommentResponse) -> "CommentType":
        return cls(
            id=strawberry.ID(str(comment.id)),
            body=comment.body,
            link_id=strawberry.ID(str(comment.link_id)),
            created_at=comment.created_at
        )

    @strawberry.field
    async def link(self, info: Info) -> Optional[LinkType]:
        link = await run_in_threadpool(link_service.get_link, info.context.request_context, str(self.link_id))
        return LinkType.from_record(link) if link else None


@strawberry.type
class AuthPayload:
    token: str
    user: UserType
