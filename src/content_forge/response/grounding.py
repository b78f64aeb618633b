"""Grounding source extraction from response citations."""

from __future__ import annotations

import logging

from content_forge.constants import DEFAULT_SOURCE_TITLE
from content_forge.core.models import GroundingSource
from content_forge.core.types import Absent, OtherCitation, RawResponse, WebCitation

log = logging.getLogger(__name__)


def extract(raw: RawResponse) -> tuple[GroundingSource, ...]:
    """Return the web sources cited by ``raw``, in order of first mention.

    Non-web citations and web citations without a URI are skipped. Duplicates
    are kept.
    """
    match raw.citations:
        case Absent():
            return ()
        case citations:
            pass

    sources: list[GroundingSource] = []
    skipped = 0
    for citation in citations:
        match citation:
            case WebCitation(uri=str(uri), title=title) if uri.strip():
                sources.append(
                    GroundingSource(title=title or DEFAULT_SOURCE_TITLE, uri=uri)
                )
            case WebCitation() | OtherCitation():
                skipped += 1
    if skipped:
        log.debug("Skipped %d citations without a web URI", skipped)
    return tuple(sources)
