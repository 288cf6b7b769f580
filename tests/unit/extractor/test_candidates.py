"""
Unit tests for candidate extraction and the record model.
"""

import pytest
from resosorter.extractor.candidates import extract_candidates, normalize_link
from resosorter.extractor.models import NO_LINK, RawCandidate, ResolutionRecord, TextFragment
from resosorter.observability.metrics import METRICS

from tests.helpers import metric_delta


@pytest.mark.unit
class TestExtractCandidates:
    """Test cases for extract_candidates."""

    def test_one_candidate_per_match(self):
        """Every match shares the link of its fragment."""
        fragments = [TextFragment("1920x1080 or 1280x720", "http://a")]

        candidates = list(extract_candidates(fragments))

        assert candidates == [
            RawCandidate("1920x1080", "http://a"),
            RawCandidate("1280x720", "http://a"),
        ]

    def test_missing_link_becomes_sentinel(self):
        """Fragments without an anchor yield the 'No link' sentinel."""
        candidates = list(extract_candidates([TextFragment("720p", None)]))

        assert candidates == [RawCandidate("720p", NO_LINK)]
        assert not candidates[0].has_link

    def test_order_follows_fragments_then_matches(self):
        """Output order is deterministic."""
        fragments = [
            TextFragment("b 1080p a 720p", "http://1"),
            TextFragment("nothing here", "http://2"),
            TextFragment("2160p", None),
        ]

        tokens = [c.token for c in extract_candidates(fragments)]

        assert tokens == ["1080p", "720p", "2160p"]

    def test_counts_matched_tokens(self):
        """Each match increments the tokens counter."""
        with metric_delta(METRICS["tokens_matched"], 3):
            list(extract_candidates([TextFragment("720p 1080p 2160p", None)]))

    @pytest.mark.parametrize("link", [None, "", "   "])
    def test_normalize_link_blank(self, link):
        assert normalize_link(link) == NO_LINK

    def test_normalize_link_keeps_real_href(self):
        assert normalize_link("https://example.com/x") == "https://example.com/x"


@pytest.mark.unit
class TestResolutionRecord:
    """Test cases for ResolutionRecord construction."""

    def test_valid_record(self):
        record = ResolutionRecord("1920x1080", 1920, 1080, 2073600, "http://a")

        assert record.has_link
        assert record.to_dict() == {
            "original": "1920x1080",
            "width": 1920,
            "height": 1080,
            "area": 2073600,
            "link": "http://a",
        }

    @pytest.mark.parametrize(
        "width, height, area",
        [
            (10, 1080, 10800),  # width at the limit
            (1920, 10, 19200),  # height at the limit
            (30, 30, 900),  # area below the limit
            (1920, 1080, 1),  # inconsistent area
        ],
    )
    def test_invalid_record_rejected(self, width, height, area):
        with pytest.raises(ValueError):
            ResolutionRecord("x", width, height, area)

    def test_record_is_immutable(self):
        record = ResolutionRecord("1280x720", 1280, 720, 921600)
        with pytest.raises(AttributeError):
            record.width = 1  # type: ignore[misc]
