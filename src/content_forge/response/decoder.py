"""Recover structured data from model text.

Models asked for JSON still wrap it in prose or markdown fences, or leave a
trailing comma behind. ``decode`` tries progressively more forgiving steps
and gives up with ``MalformedPayloadError`` rather than inventing a value.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from content_forge.exceptions import MalformedPayloadError

log = logging.getLogger(__name__)

_CLOSERS = {"{": "}", "[": "]"}
# A JSON string literal, matched first so repairs never touch its contents.
_STRING = r'"(?:[^"\\]|\\.)*"'
_TRAILING_COMMA = re.compile(rf"({_STRING})|,\s*([}}\]])")
_BARE_KEY = re.compile(rf"({_STRING})|([{{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)")

_MAX_FRAGMENT = 500


def _try_parse(text: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except json.JSONDecodeError:
        return False, None


def _greedy_regions(text: str) -> list[str]:
    last_closer = {closer: text.rfind(closer) for closer in _CLOSERS.values()}
    regions = []
    for start, char in enumerate(text):
        closer = _CLOSERS.get(char)
        if closer is not None and last_closer[closer] > start:
            regions.append(text[start : last_closer[closer] + 1])
    return regions


def _balanced_regions(text: str) -> list[str]:
    # Quotes only count inside brackets; prose quotes are ignored.
    regions = []
    stack: list[int] = []
    in_string = escaped = False
    for i, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"' and stack:
            in_string = True
        elif char in _CLOSERS:
            stack.append(i)
        elif char in "}]" and stack:
            regions.append(text[stack.pop() : i + 1])
    return regions


def candidate_regions(text: str) -> list[str]:
    """Return the bracketed regions of ``text`` worth decoding, largest first.

    Each opening ``{`` or ``[`` contributes its greedy region (to the last
    matching closer in the text) and its balanced region (to the closer that
    brings nesting back to zero). Ties keep their order of appearance.
    """
    regions = list(dict.fromkeys(_greedy_regions(text) + _balanced_regions(text)))
    regions.sort(key=len, reverse=True)
    return regions


def extract_region(text: str) -> str | None:
    """Return the largest JSON-looking region of ``text``, if any."""
    regions = candidate_regions(text)
    return regions[0] if regions else None


def _strip_trailing_comma(match: re.Match[str]) -> str:
    return match.group(1) or match.group(2)


def _quote_bare_key(match: re.Match[str]) -> str:
    if match.group(1):
        return match.group(1)
    return f'{match.group(2)}"{match.group(3)}"{match.group(4)}'


def repair(fragment: str) -> list[str]:
    """Return the repaired candidates of ``fragment``, least invasive first."""
    without_commas = _TRAILING_COMMA.sub(_strip_trailing_comma, fragment)
    quoted = _BARE_KEY.sub(_quote_bare_key, without_commas)
    return [without_commas, quoted]


def _recover(region: str) -> tuple[bool, Any]:
    ok, value = _try_parse(region)
    if ok:
        log.debug("Recovered JSON from a %d-char region", len(region))
        return True, value
    for candidate in repair(region):
        ok, value = _try_parse(candidate)
        if ok:
            log.info("Repaired malformed JSON response")
            return True, value
    return False, None


def decode(raw_text: str | None) -> Any:
    """Decode ``raw_text`` into a JSON value.

    Steps, in order: strict parse of the trimmed text; then, for each
    bracketed region from the largest down, a strict parse followed by the
    repaired variants. Prose such as citation markers (``[1]``) therefore
    never win over a larger payload beside them.

    Raises:
        MalformedPayloadError: If every step fails. ``fragment`` holds the
            largest region for diagnostics.
    """
    text = (raw_text or "").strip()
    if not text:
        raise MalformedPayloadError("Response was empty", fragment=raw_text)

    ok, value = _try_parse(text)
    if ok:
        return value

    regions = candidate_regions(text)
    if not regions:
        log.warning("No JSON region found in response (%d chars)", len(text))
        raise MalformedPayloadError(
            "Response did not contain JSON", fragment=text[:_MAX_FRAGMENT]
        )

    for region in regions:
        ok, value = _recover(region)
        if ok:
            return value

    log.warning("Could not repair JSON response (%d chars)", len(regions[0]))
    raise MalformedPayloadError(
        "Response JSON could not be recovered", fragment=regions[0][:_MAX_FRAGMENT]
    )
