import pytest

from content_forge.core.models import GroundingSource
from content_forge.core.types import ABSENT, OtherCitation, RawResponse, WebCitation
from content_forge.response.grounding import extract

pytestmark = pytest.mark.unit


def test_absent_metadata_yields_no_sources():
    assert extract(RawResponse(text="{}", citations=ABSENT)) == ()


def test_empty_citation_list_yields_no_sources():
    assert extract(RawResponse(text="{}", citations=())) == ()


def test_web_citations_are_kept_in_order():
    raw = RawResponse(
        citations=(
            WebCitation(uri="https://a.example", title="A"),
            WebCitation(uri="https://b.example", title="B"),
        )
    )
    assert extract(raw) == (
        GroundingSource(title="A", uri="https://a.example"),
        GroundingSource(title="B", uri="https://b.example"),
    )


def test_missing_title_falls_back_to_reference():
    raw = RawResponse(citations=(WebCitation(uri="https://a.example"),))
    (source,) = extract(raw)
    assert source.title == "Reference"


def test_non_web_and_uri_less_citations_are_skipped():
    raw = RawResponse(
        citations=(
            OtherCitation(kind="retrieved_context"),
            WebCitation(uri=None, title="no link"),
            WebCitation(uri="   "),
            WebCitation(uri="https://kept.example"),
        )
    )
    assert [s.uri for s in extract(raw)] == ["https://kept.example"]


def test_duplicates_are_not_collapsed():
    citation = WebCitation(uri="https://a.example", title="A")
    raw = RawResponse(citations=(citation, citation))
    assert len(extract(raw)) == 2
