"""Contexte GraphQL : store, notifier et user courant pour chaque requête"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from app.core.context import RequestContext
from app.core.database import get_db
from app.services.auth_service import resolve_current_user
from app.services.notifier import Notifier, get_notifier
from app.store.sql import SqlStore


class GraphQLContext(BaseContext):
    def __init__(self, request_context: RequestContext):
        super().__init__()
        self.request_context = request_context


def get_context(
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    authorization: Optional[str] = Header(None)
) -> GraphQLContext:
    store = SqlStore(db)
    current_user = resolve_current_user(store, authorization)
    return GraphQLContext(RequestContext(store=store, notifier=notifier, current_user=current_user))
