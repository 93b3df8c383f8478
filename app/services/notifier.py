"""
Pub/sub en mémoire pour les subscriptions GraphQL.

Chaque abonné a sa propre file d'attente. `publish` ne bloque jamais :
l'event est déposé dans la boucle asyncio de chaque abonné via
`call_soon_threadsafe`, ce qui permet de publier depuis un thread de
FastAPI comme depuis la boucle elle-même.

Politique de backpressure : un abonné qui accumule plus de `max_pending`
events non lus est déconnecté. Il reçoit encore les events déjà en file,
puis `SubscriberOverflow`.
"""

import asyncio
import logging
import threading
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.errors import SubscriberOverflow

logger = logging.getLogger(__name__)

NEW_LINK_TOPIC = "newLink"

_CLOSED = object()
_OVERFLOW = object()


class Subscription:
    """Itérateur async sur les events d'un topic, à partir de sa création"""

    def __init__(self, notifier: "Notifier", topic: str, max_pending: int):
        self.topic = topic
        self.max_pending = max_pending
        self._notifier = notifier
        self._loop = asyncio.get_running_loop()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False
        self._finished = False

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        return self._queue.qsize()

    def _offer(self, event: Any) -> bool:
        # appelé par publish, depuis n'importe quel thread
        if self._closed:
            return False
        try:
            self._loop.call_soon_threadsafe(self._enqueue, event)
        except RuntimeError:
            # boucle fermée : le consommateur a disparu
            logger.warning(f"Dropping subscriber on '{self.topic}': event loop is closed")
            self._closed = True
            self._notifier._discard(self)
            return False
        return True

    def _enqueue(self, event: Any):
        if self._closed:
            return
        if self._queue.qsize() >= self.max_pending:
            logger.warning(f"Subscriber on '{self.topic}' exceeded {self.max_pending} pending events, disconnecting")
            self._closed = True
            self._notifier._discard(self)
            self._queue.put_nowait(_OVERFLOW)
            return
        self._queue.put_nowait(event)

    def _wake(self):
        self._queue.put_nowait(_CLOSED)

    def close(self):
        if self._closed:
            return
        self._closed = True
        self._notifier._discard(self)
        try:
            self._loop.call_soon_threadsafe(self._wake)
        except RuntimeError:
            pass

    async def aclose(self):
        self.close()

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._finished:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            self._finished = True
            raise StopAsyncIteration
        if item is _OVERFLOW:
            self._finished = True
            raise SubscriberOverflow(self.topic, self.max_pending)
        return item


class Notifier:
    def __init__(self, max_pending: Optional[int] = None):
        self.max_pending = max_pending if max_pending is not None else settings.NOTIFIER_MAX_PENDING
        self._lock = threading.Lock()
        self._subscriptions: Dict[str, List[Subscription]] = {}

    def subscribe(self, topic: str) -> Subscription:
        """Crée un abonnement indépendant (doit être appelé dans une boucle asyncio)"""
        subscription = Subscription(self, topic, self.max_pending)
        with self._lock:
            self._subscriptions.setdefault(topic, []).append(subscription)
        logger.debug(f"New subscriber on '{topic}'")
        return subscription

    def publish(self, topic: str, event: Any) -> int:
        """Dépose l'event chez chaque abonné actif, retourne le nombre d'abonnés touchés"""
        with self._lock:
            snapshot = list(self._subscriptions.get(topic, ()))
        delivered = 0
        for subscription in snapshot:
            if subscription._offer(event):
                delivered += 1
        logger.debug(f"Published on '{topic}' to {delivered} subscriber(s)")
        return delivered

    def subscriber_count(self, topic: Optional[str] = None) -> int:
        with self._lock:
            if topic is not None:
                return len(self._subscriptions.get(topic, ()))
            return sum(len(subs) for subs in self._subscriptions.values())

    def _discard(self, subscription: Subscription):
        with self._lock:
            subs = self._subscriptions.get(subscription.topic)
            if subs and subscription in subs:
                subs.remove(subscription)
                if not subs:
                    del self._subscriptions[subscription.topic]


# Notifier partagé par tout le process
_default_notifier = Notifier()


def get_notifier() -> Notifier:
    """Dépendance FastAPI : notifier du process"""
    return _default_notifier
