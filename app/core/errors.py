"""
Erreurs métier exposées aux clients GraphQL.

Chaque erreur porte un `code` que strawberry recopie dans les `extensions`
de l'entrée `errors[]` de la réponse.
"""

from typing import Any, Dict


class HackerNewsError(Exception):
    code = "INTERNAL"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code}


# ============ Validation ============

class ValidationError(HackerNewsError):
    code = "VALIDATION_ERROR"


class OutOfRange(ValidationError):
    def __init__(self, value: int, min_value: int, max_value: int):
        super().__init__(f"Value {value} is out of range, expected between {min_value} and {max_value}")
        self.value = value
        self.min_value = min_value
        self.max_value = max_value


class NegativeValue(ValidationError):
    def __init__(self, value: int):
        super().__init__(f"Value {value} must not be negative")
        self.value = value


class EmptyDescription(ValidationError):
    def __init__(self):
        super().__init__("Description must not be empty")


class InvalidUrl(ValidationError):
    def __init__(self, value: str):
        super().__init__(f"Invalid url '{value}'")
        self.value = value


class EmptyBody(ValidationError):
    def __init__(self):
        super().__init__("Comment body must not be empty")


# ============ Références ============

class NotFoundOrInvalidReference(HackerNewsError):
    code = "NOT_FOUND"


class InvalidLinkId(NotFoundOrInvalidReference):
    # même erreur pour un id mal formé et un id inexistant
    def __init__(self, raw: str):
        super().__init__(f"Cannot post comment on non-existing link with id '{raw}'.")
        self.raw = raw


# ============ Auth ============

class Unauthenticated(HackerNewsError):
    code = "UNAUTHENTICATED"

    def __init__(self, message: str = "Unauthenticated!"):
        super().__init__(message)


class InvalidCredentials(HackerNewsError):
    code = "INVALID_CREDENTIALS"

    def __init__(self):
        super().__init__("Email or password incorrect")


# ============ Store / Notifier ============

class ConflictFromStore(HackerNewsError):
    code = "CONFLICT"


class EmailAlreadyRegistered(ConflictFromStore):
    def __init__(self, email: str):
        super().__init__(f"Email '{email}' is already registered")
        self.email = email


class SubscriberOverflow(HackerNewsError):
    code = "DELIVERY_FAILED"

    def __init__(self, topic: str, max_pending: int):
        super().__init__(f"Subscriber on '{topic}' fell behind by more than {max_pending} events and was disconnected")
        self.topic = topic
        self.max_pending = max_pending
