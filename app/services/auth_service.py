"""Auth service : signup, login, me et résolution du user courant"""

import logging
from typing import Optional, Tuple

from app.core.context import RequestContext
from app.core.errors import EmailAlreadyRegistered, InvalidCredentials, Unauthenticated
from app.core.security import create_access_token, decode_token, hash_password, verify_password
from app.schemas.user import LoginRequest, UserCreate, UserResponse
from app.store.base import Store, StoreConflict

logger = logging.getLogger(__name__)


def _public(user) -> UserResponse:
    # ne jamais renvoyer le hash du password
    return UserResponse(id=user.id, email=user.email, name=user.name, created_at=user.created_at)


def signup(ctx: RequestContext, data: UserCreate) -> Tuple[str, UserResponse]:
    """Créer un nouvel utilisateur et retourner son token"""

    # Vérifie si l'email existe déjà
    if ctx.store.find_user_by_email(data.email):
        raise EmailAlreadyRegistered(data.email)

    try:
        user = ctx.store.create_user(
            email=data.email,
            name=data.name,
            password_hash=hash_password(data.password)
        )
    except StoreConflict as e:
        # deux signups concurrents avec le même email
        raise EmailAlreadyRegistered(data.email) from e

    logger.info(f"User {user.id} signed up")
    return create_access_token(user.id, user.email), _public(user)


def login(ctx: RequestContext, credentials: LoginRequest) -> Tuple[str, UserResponse]:
    """Se connecter et recevoir un token"""

    # même erreur pour email inconnu et mauvais password
    user = ctx.store.find_user_by_email(credentials.email)
    if not user:
        raise InvalidCredentials()

    if not verify_password(credentials.password, user.password_hash):
        raise InvalidCredentials()

    return create_access_token(user.id, user.email), _public(user)


def me(ctx: RequestContext) -> UserResponse:
    if ctx.current_user is None:
        raise Unauthenticated()
    return ctx.current_user


def resolve_current_user(store: Store, authorization: Optional[str]) -> Optional[UserResponse]:
    """
    Récupère l'utilisateur depuis le header Authorization.

    Header absent, token invalide ou expiré, user supprimé : tous donnent
    None (pas d'utilisateur courant). C'est aux resolvers de refuser.
    """
    if not authorization:
        return None

    token = authorization.replace("Bearer ", "")
    user_id = decode_token(token)
    if not user_id:
        logger.warning("Invalid or expired token in Authorization header")
        return None

    user = store.find_user(user_id)
    if not user:
        logger.warning(f"Token refers to unknown user {user_id}")
        return None

    return _public(user)


def find_user(ctx: RequestContext, user_id: Optional[int]) -> Optional[UserResponse]:
    if user_id is None:
        return None
    user = ctx.store.find_user(user_id)
    return _public(user) if user else None
