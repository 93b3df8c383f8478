"""Contexte explicite passé à chaque fonction de service"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from app.schemas.user import UserResponse

if TYPE_CHECKING:
    from app.services.notifier import Notifier
    from app.store.base import Store


@dataclass
class RequestContext:
    store: "Store"
    notifier: "Notifier"
    current_user: Optional[UserResponse] = None
