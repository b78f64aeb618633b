"""Ambient configuration scopes.

``config_scope`` makes a ``ResolvedConfig`` the result of ``resolve_config()``
inside a ``with`` block. It only affects resolution: a client that already
froze its configuration does not see later scope changes.
"""

from collections.abc import Generator
from contextlib import contextmanager
import contextvars
from typing import Any

from .types import ResolvedConfig

_ambient_resolved_config: contextvars.ContextVar[ResolvedConfig] = (
    contextvars.ContextVar("content_forge_resolved_config")
)


def get_ambient_resolved_config() -> ResolvedConfig | None:
    """Return the config set by the innermost scope, or None."""
    return _ambient_resolved_config.get(None)


@contextmanager
def config_scope(config: ResolvedConfig) -> Generator[None]:
    """Use ``config`` for every ``resolve_config()`` call in the block.

    Example:
        base = resolve_config()
        with config_scope(base.with_overrides(max_attempts=5)):
            client = create_client()
    """
    token = _ambient_resolved_config.set(config)
    try:
        yield
    finally:
        _ambient_resolved_config.reset(token)


@contextmanager
def config_override(**overrides: Any) -> Generator[None]:
    """Scope the current configuration with ``overrides`` applied."""
    base_config = get_ambient_resolved_config()
    if base_config is None:
        from .api import resolve_config

        base_config = resolve_config()
    with config_scope(base_config.with_overrides(**overrides)):
        yield
