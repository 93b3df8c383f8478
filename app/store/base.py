"""
Interface du Store (persistance des links, comments et users).

Deux implémentations :
- SqlStore : session SQLAlchemy (Postgres en prod, SQLite en test)
- InMemoryStore : dictionnaires protégés par un verrou
"""

from typing import List, Optional, Protocol

from app.schemas.comment import CommentResponse
from app.schemas.link import LinkFilter, LinkResponse
from app.schemas.user import UserRecord


class StoreConflict(Exception):
    """Violation d'intégrité (FK manquante, email déjà pris...) détectée par le Store"""

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint


class Store(Protocol):
    # Links
    def create_link(self, url: str, description: str, posted_by_id: Optional[int] = None) -> LinkResponse: ...
    def find_links(self, where: LinkFilter, skip: int, take: int) -> List[LinkResponse]: ...
    def find_link(self, link_id: int) -> Optional[LinkResponse]: ...

    # Comments
    def create_comment(self, link_id: int, body: str) -> CommentResponse: ...
    def find_comment(self, comment_id: int) -> Optional[CommentResponse]: ...
    def find_comments_for_link(self, link_id: int) -> List[CommentResponse]: ...

    # Users
    def create_user(self, email: str, name: str, password_hash: str) -> UserRecord: ...
    def find_user(self, user_id: int) -> Optional[UserRecord]: ...
    def find_user_by_email(self, email: str) -> Optional[UserRecord]: ...
