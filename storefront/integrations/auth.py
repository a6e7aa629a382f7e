"""Current shopper identity with change notifications."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

IdentityListener = Callable[["Identity | None"], None]


@dataclass(frozen=True, slots=True)
class Identity:
    user_id: str
    email: str | None = None
    display_name: str | None = None


class AuthState:
    """Holds the signed-in identity, or None for a guest."""

    def __init__(self, identity: Identity | None = None):
        self._identity = identity
        self._listeners: list[IdentityListener] = []

    def current(self) -> Identity | None:
        return self._identity

    @property
    def is_guest(self) -> bool:
        return self._identity is None

    def set_identity(self, identity: Identity | None) -> None:
        if identity == self._identity:
            return
        self._identity = identity
        for listener in list(self._listeners):
            try:
                listener(identity)
            except Exception:
                logger.exception("Identity listener failed")

    def on_change(self, listener: IdentityListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
