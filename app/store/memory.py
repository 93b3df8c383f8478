"""Store en mémoire, utile pour les tests et les démos sans base"""

import itertools
import threading
from datetime import datetime
from typing import Dict, List, Optional

from app.schemas.comment import CommentResponse
from app.schemas.link import LinkFilter, LinkResponse
from app.schemas.user import UserRecord
from app.store.base import StoreConflict


class InMemoryStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._links: Dict[int, LinkResponse] = {}
        self._comments: Dict[int, CommentResponse] = {}
        self._users: Dict[int, UserRecord] = {}
        self._ids = {
            "link": itertools.count(1),
            "comment": itertools.count(1),
            "user": itertools.count(1),
        }

    # ============ Links ============

    def create_link(self, url: str, description: str, posted_by_id: Optional[int] = None) -> LinkResponse:
        with self._lock:
            if posted_by_id is not None and posted_by_id not in self._users:
                raise StoreConflict(f"User {posted_by_id} does not exist", constraint="links.posted_by_id")
            link = LinkResponse(
                id=next(self._ids["link"]),
                url=url,
                description=description,
                posted_by_id=posted_by_id,
                created_at=datetime.utcnow()
            )
            self._links[link.id] = link
            return link

    def find_links(self, where: LinkFilter, skip: int, take: int) -> List[LinkResponse]:
        with self._lock:
            links = sorted(self._links.values(), key=lambda link: link.id)
        matching = [link for link in links if where.matches(link.url, link.description)]
        return matching[skip:skip + take]

    def find_link(self, link_id: int) -> Optional[LinkResponse]:
        with self._lock:
            return self._links.get(link_id)

    # ============ Comments ============

    def create_comment(self, link_id: int, body: str) -> CommentResponse:
        with self._lock:
            if link_id not in self._links:
                raise StoreConflict(f"Link {link_id} does not exist", constraint="comments.link_id")
            comment = CommentResponse(
                id=next(self._ids["comment"]),
                body=body,
                link_id=link_id,
                created_at=datetime.utcnow()
            )
            self._comments[comment.id] = comment
            return comment

    def find_comment(self, comment_id: int) -> Optional[CommentResponse]:
        with self._lock:
            return self._comments.get(comment_id)

    def find_comments_for_link(self, link_id: int) -> List[CommentResponse]:
        with self._lock:
            comments = [c for c in self._comments.values() if c.link_id == link_id]
        return sorted(comments, key=lambda c: c.id)

    # ============ Users ============

    def create_user(self, email: str, name: str, password_hash: str) -> UserRecord:
        with self._lock:
            if any(u.email == email for u in self._users.values()):
                raise StoreConflict(f"Email {email} already exists", constraint="users.email")
            user = UserRecord(
                id=next(self._ids["user"]),
                email=email,
                name=name,
                password_hash=password_hash,
                created_at=datetime.utcnow()
            )
            self._users[user.id] = user
            return user

    def find_user(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(user_id)

    def find_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)
