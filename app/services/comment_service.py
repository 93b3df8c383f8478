"""Comment service"""

import logging
from typing import List, Optional

from app.core.context import RequestContext
from app.core.errors import EmptyBody, InvalidLinkId
from app.schemas.comment import CommentCreate, CommentResponse
from app.services.validators import parse_entity_id
from app.store.base import StoreConflict

logger = logging.getLogger(__name__)


def post_comment_on_link(ctx: RequestContext, data: CommentCreate) -> CommentResponse:
    """
    Poster un commentaire sur un lien.

    Un id mal formé ("abc") et un id inexistant ("999999") donnent la même
    erreur InvalidLinkId : le premier est rejeté sans appel au Store, le
    second par la contrainte de clé étrangère du Store.
    """
    link_id = parse_entity_id(data.link_id)
    if link_id is None:
        raise InvalidLinkId(data.link_id)

    if not data.body.strip():
        raise EmptyBody()

    try:
        return ctx.store.create_comment(link_id=link_id, body=data.body)
    except StoreConflict as e:
        logger.info(f"Comment rejected for link '{data.link_id}': {e}")
        raise InvalidLinkId(data.link_id) from e


def get_comment(ctx: RequestContext, raw_id: str) -> Optional[CommentResponse]:
    comment_id = parse_entity_id(raw_id)
    if comment_id is None:
        return None
    return ctx.store.find_comment(comment_id)


def comments_for_link(ctx: RequestContext, link_id: int) -> List[CommentResponse]:
    return ctx.store.find_comments_for_link(link_id)
