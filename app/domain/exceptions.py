"""Errors raised by the notification core."""


class NotificationError(Exception):
    """Base class for notification subsystem failures."""


class InvalidCredential(NotificationError):
    """Raised when a bearer token cannot be verified."""


class StorageFailure(NotificationError):
    """Raised when the durable notification log cannot record an entry.

    The durability guarantee is broken, so the enclosing operation must fail.
    """

    def __init__(self, message: str, *, recipient_id: int | None = None) -> None:
        super().__init__(message)
        self.recipient_id = recipient_id


class DeliveryFailure(NotificationError):
    """Raised by a push or email transport; always contained by the caller."""


__all__ = [
    "NotificationError",
    "InvalidCredential",
    "StorageFailure",
    "DeliveryFailure",
]
