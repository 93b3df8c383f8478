"""Link service : feed, postLink et stream des nouveaux liens"""

import logging
from typing import AsyncGenerator, List, Optional

from app.core.context import RequestContext
from app.core.errors import EmptyDescription, InvalidUrl, Unauthenticated
from app.schemas.link import FeedArgs, LinkCreate, LinkFilter, LinkResponse, NewLinkEvent
from app.services.notifier import NEW_LINK_TOPIC
from app.services.validators import parse_entity_id, validate_skip, validate_take, validate_url
from app.store.base import StoreConflict

logger = logging.getLogger(__name__)


def feed(ctx: RequestContext, args: FeedArgs) -> List[LinkResponse]:
    take = validate_take(args.take)
    skip = validate_skip(args.skip)
    # filtre vide ou absent = pas de filtre
    where = LinkFilter(needle=args.filter_needle or None)
    return ctx.store.find_links(where=where, skip=skip, take=take)


def get_link(ctx: RequestContext, raw_id: str) -> Optional[LinkResponse]:
    link_id = parse_entity_id(raw_id)
    if link_id is None:
        return None
    return ctx.store.find_link(link_id)


def post_link(ctx: RequestContext, data: LinkCreate) -> LinkResponse:
    """
    Créer un lien et notifier les abonnés.

    LOGIQUE MÉTIER:
    1. Refuser si aucun user connecté (Unauthenticated)
    2. Refuser une description vide (EmptyDescription)
    3. Refuser une url mal formée (InvalidUrl)
    4. Persister le lien
    5. Publier {newLink} sur le topic "newLink"

    Les étapes 1 à 3 passent AVANT toute écriture : pas d'écriture partielle.
    La publication n'a lieu qu'une fois le lien enregistré.
    """
    if ctx.current_user is None:
        raise Unauthenticated()

    if not data.description.strip():
        raise EmptyDescription()

    if not validate_url(data.url):
        raise InvalidUrl(data.url)

    try:
        link = ctx.store.create_link(
            url=data.url,
            description=data.description,
            posted_by_id=ctx.current_user.id
        )
    except StoreConflict as e:
        # le user du token n'existe plus : équivalent à "pas de user"
        logger.warning(f"Link rejected, user {ctx.current_user.id} no longer exists: {e}")
        raise Unauthenticated() from e
    logger.info(f"Link {link.id} posted by user {ctx.current_user.id}")

    ctx.notifier.publish(NEW_LINK_TOPIC, NewLinkEvent(new_link=link))
    return link


async def new_link_stream(ctx: RequestContext) -> AsyncGenerator[LinkResponse, None]:
    # l'abonnement est libéré dès que le client se déconnecte
    subscription = ctx.notifier.subscribe(NEW_LINK_TOPIC)
    try:
        async for event in subscription:
            yield event.new_link
    finally:
        subscription.close()
