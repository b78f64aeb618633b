"""Turns raw responses into validated domain records."""

from __future__ import annotations

import logging
from typing import Any, get_args, get_origin

from pydantic import TypeAdapter, ValidationError

from content_forge.core.models import GroundingSource
from content_forge.core.types import DecodedResult, RawResponse
from content_forge.exceptions import MalformedPayloadError

from .decoder import decode
from .grounding import extract

log = logging.getLogger(__name__)


class ResponseProcessor:
    """Decodes, validates and attaches grounding sources.

    A decoded value that does not satisfy the record type is a
    ``MalformedPayloadError``; no field is ever default-filled to paper over a
    missing one.
    """

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def decode(self, raw: RawResponse, *, grounded: bool = False) -> DecodedResult[Any]:
        sources = extract(raw) if grounded else ()
        return DecodedResult(value=decode(raw.text), sources=sources)

    def to_record[T](
        self, raw: RawResponse, record_type: type[T] | Any, *, grounded: bool = False
    ) -> DecodedResult[T]:
        """Decode ``raw`` and validate it as ``record_type``.

        ``record_type`` may be a model class or a parametrized container such
        as ``tuple[VideoConcept, ...]``.
        """
        decoded = self.decode(raw, grounded=grounded)
        adapter = self._adapters.get(record_type)
        if adapter is None:
            adapter = self._adapters[record_type] = TypeAdapter(record_type)
        try:
            value = adapter.validate_python(decoded.value)
        except ValidationError as e:
            name = record_name(record_type)
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "<root>"
            log.warning(
                "Decoded payload does not match %s: %d errors", name, e.error_count()
            )
            raise MalformedPayloadError(
                f"Response does not match {name} at {location}: {first['msg']}",
                fragment=(raw.text or "")[:500],
            ) from e
        if decoded.sources:
            value = attach_sources(value, decoded.sources)
        return DecodedResult(value=value, sources=decoded.sources)


def attach_sources(value: Any, sources: tuple[GroundingSource, ...]) -> Any:
    """Copy ``sources`` onto records that carry a ``sources`` field."""
    if isinstance(value, tuple):
        return tuple(attach_sources(v, sources) for v in value)
    if "sources" in getattr(type(value), "model_fields", {}):
        return value.model_copy(update={"sources": sources})
    return value


def record_name(record_type: Any) -> str:
    """Readable name of a record type, e.g. ``tuple[VideoConcept, ...]``."""
    if record_type is Ellipsis:
        return "..."
    origin = get_origin(record_type)
    if origin is None:
        return getattr(record_type, "__name__", str(record_type))
    args = ", ".join(record_name(arg) for arg in get_args(record_type))
    return f"{record_name(origin)}[{args}]"
