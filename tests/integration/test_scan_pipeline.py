"""
Integration tests for the extraction pipeline.
"""

import pytest
from resosorter.config import Config, DedupConfig, RankingConfig
from resosorter.extractor.models import NO_LINK, ResolutionRecord, TextFragment
from resosorter.observability.metrics import METRICS
from resosorter.pipeline import ResolutionPipeline, scan_fragments
from resosorter.source.soup_source import SoupFragmentSource

from tests.helpers import histogram_observes


@pytest.mark.integration
class TestResolutionPipeline:
    """End-to-end behaviour of one extraction pass."""

    def test_linked_token_survives_unlinked_duplicate(self, scenario_fragments, isolated_config):
        result = ResolutionPipeline(isolated_config).run(scenario_fragments)

        assert result.records == (
            ResolutionRecord(original="1920x1080", width=1920, height=1080, area=2073600, link="http://a"),
        )
        assert not result.is_empty
        assert result.stats["candidates"] == 3
        assert result.stats["unique"] == 2
        assert result.stats["rejected_bounds"] == 1

    def test_strict_keys_keep_separator_variant(self, scenario_fragments):
        config = Config(dedup=DedupConfig(fold_separators=False))
        result = ResolutionPipeline(config).run(scenario_fragments)

        assert sorted(r.original for r in result.records) == ["1,920x1,080", "1920x1080"]

    def test_case_variants_collapse(self):
        result = scan_fragments(
            [TextFragment("1920X1080", None), TextFragment("1920x1080", "http://later")]
        )

        assert len(result.records) == 1
        # The upgrade replaces the whole candidate, spelling included
        assert result.records[0].original == "1920x1080"
        assert result.records[0].link == "http://later"

    def test_non_ascii_digits_produce_no_record(self):
        result = scan_fragments([TextFragment("size ١٩٢٠x١٠٨٠ here", None)])
        assert result.records == ()

    def test_multiplication_sign_variant_collapses(self):
        result = scan_fragments([TextFragment("1920x1080 and 1920×1080", None)])
        assert [r.original for r in result.records] == ["1920x1080"]

    def test_empty_result_is_not_an_error(self):
        result = scan_fragments([TextFragment("nothing to see 3x3", None), TextFragment("", None)])

        assert result.is_empty
        assert result.records == ()
        assert isinstance(scan_fragments([TextFragment("720p", None)]).records, tuple)
        assert result.ranker.sort_by("area") == ()

    def test_initial_order_and_toggle(self):
        result = scan_fragments(
            [
                TextFragment("1280x720", None),
                TextFragment("3840x2160", None),
                TextFragment("1920x1080", None),
            ]
        )
        ranker = result.ranker

        assert [r.original for r in ranker.records] == ["3840x2160", "1920x1080", "1280x720"]
        assert [r.original for r in ranker.sort_by("area")] == ["3840x2160", "1920x1080", "1280x720"]
        assert [r.original for r in ranker.sort_by("area")] == ["1280x720", "1920x1080", "3840x2160"]

    def test_configured_initial_order(self):
        config = Config(ranking=RankingConfig(default_key="height", default_ascending=True))
        result = ResolutionPipeline(config).run([TextFragment("2160p 720p 1080p", None)])

        assert [r.height for r in result.records] == [720, 1080, 2160]

    def test_every_record_satisfies_invariants(self):
        text = "4,096x2,160 4.096x2.160 1080p 2160p 5x5 100x5 0p 11x11 33x33 7680×4320"
        result = scan_fragments([TextFragment(text, None)])

        for record in result.records:
            assert record.area == record.width * record.height
            assert record.width > 10 and record.height > 10 and record.area > 1000
        assert {r.original for r in result.records} == {"4,096x2,160", "1080p", "2160p", "33x33", "7680×4320"}

    def test_scan_duration_recorded(self):
        with histogram_observes(METRICS["scan_duration_seconds"]):
            scan_fragments([TextFragment("720p", None)])

    def test_html_page(self, sample_html):
        fragments = SoupFragmentSource().fragments(sample_html, base_url="https://example.com/search")
        result = scan_fragments(fragments)

        by_original = {r.original: r for r in result.records}

        # Script and style content never reaches the matcher; 2x3 and 5x500 fail bounds
        assert set(by_original) == {"3840x2160", "1920x1080", "720p"}
        assert by_original["3840x2160"].link == "https://example.com/img/wallpaper-4k"
        # First seen as "1,920X1,080" in unlinked text, upgraded by the linked "1920x1080"
        assert by_original["1920x1080"].link == "https://cdn.example.com/hd.jpg"
        assert by_original["720p"].link == NO_LINK
        assert [r.original for r in result.records] == ["3840x2160", "1920x1080", "720p"]
