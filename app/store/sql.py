"""Store SQLAlchemy"""

import logging
import threading
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.comment import Comment
from app.models.link import Link
from app.models.user import User
from app.schemas.comment import CommentResponse
from app.schemas.link import LinkFilter, LinkResponse
from app.schemas.user import UserRecord
from app.store.base import StoreConflict

logger = logging.getLogger(__name__)


def _like_pattern(needle: str) -> str:
    # échappe les jokers LIKE pour un "contains" littéral
    escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlStore:
    def __init__(self, db: Session):
        self.db = db
        # la Session n'est pas thread-safe : les resolvers d'une même requête
        # tournent en parallèle dans le threadpool
        self._lock = threading.RLock()

    def _commit(self, instance, what: str):
        with self._lock:
            self.db.add(instance)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                logger.info(f"Integrity error while creating {what}: {e.orig}")
                raise StoreConflict(f"Cannot create {what}", constraint=str(e.orig)) from e
            self.db.refresh(instance)
            return instance

    def _first(self, query, schema):
        # conversion sous verrou : un commit concurrent expire les instances
        with self._lock:
            instance = query.first()
            return schema.model_validate(instance) if instance else None

    def _all(self, query, schema):
        with self._lock:
            return [schema.model_validate(instance) for instance in query.all()]

    # ============ Links ============

    def create_link(self, url: str, description: str, posted_by_id: Optional[int] = None) -> LinkResponse:
        with self._lock:
            link = self._commit(Link(url=url, description=description, posted_by_id=posted_by_id), "link")
            return LinkResponse.model_validate(link)

    def find_links(self, where: LinkFilter, skip: int, take: int) -> List[LinkResponse]:
        query = self.db.query(Link)
        if where.needle:
            pattern = _like_pattern(where.needle)
            query = query.filter(or_(
                Link.description.ilike(pattern, escape="\\"),
                Link.url.ilike(pattern, escape="\\")
            ))
        return self._all(query.order_by(Link.id).offset(skip).limit(take), LinkResponse)

    def find_link(self, link_id: int) -> Optional[LinkResponse]:
        return self._first(self.db.query(Link).filter(Link.id == link_id), LinkResponse)

    # ============ Comments ============

    def create_comment(self, link_id: int, body: str) -> CommentResponse:
        with self._lock:
            comment = self._commit(Comment(link_id=link_id, body=body), "comment")
            return CommentResponse.model_validate(comment)

    def find_comment(self, comment_id: int) -> Optional[CommentResponse]:
        return self._first(self.db.query(Comment).filter(Comment.id == comment_id), CommentResponse)

    def find_comments_for_link(self, link_id: int) -> List[CommentResponse]:
        query = self.db.query(Comment).filter(Comment.link_id == link_id).order_by(Comment.id)
        return self._all(query, CommentResponse)

    # ============ Users ============

    def create_user(self, email: str, name: str, password_hash: str) -> UserRecord:
        with self._lock:
            user = self._commit(User(email=email, name=name, password_hash=password_hash), "user")
            return UserRecord.model_validate(user)

    def find_user(self, user_id: int) -> Optional[UserRecord]:
        return self._first(self.db.query(User).filter(User.id == user_id), UserRecord)

    def find_user_by_email(self, email: str) -> Optional[UserRecord]:
        return self._first(self.db.query(User).filter(User.email == email), UserRecord)
