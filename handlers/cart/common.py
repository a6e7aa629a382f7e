"""Common cart dependencies.

The session registry is set from `setup_dependencies` in `router.py`.
"""
from __future__ import annotations

from storefront.interfaces.bot.sessions import SessionRegistry

registry: SessionRegistry | None = None


def setup_dependencies(session_registry: SessionRegistry) -> None:
    global registry
    registry = session_registry


def get_registry() -> SessionRegistry:
    if registry is None:
        raise RuntimeError("cart handlers used before setup_dependencies()")
    return registry
