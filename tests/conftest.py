"""
Test configuration for ResoSorter.

Provides shared fragments, HTML pages and an isolated configuration whose
preference file lives in a temporary directory.
"""

from pathlib import Path
from typing import List

import pytest
from resosorter.config import Config, MonitoringConfig, PreferencesConfig
from resosorter.extractor.models import ResolutionRecord, TextFragment

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")
    config.addinivalue_line("markers", "property: Property-based tests")


# ============================================================================
# Core Test Fixtures
# ============================================================================


@pytest.fixture
def isolated_config(tmp_path: Path) -> Config:
    """Configuration that never touches the user's home directory."""
    return Config(
        preferences=PreferencesConfig(path=tmp_path / "prefs" / "preferences.json"),
        monitoring=MonitoringConfig(log_level="WARNING", log_file=None),
    )


@pytest.fixture
def scenario_fragments() -> List[TextFragment]:
    """Linked token, unlinked separator-spelled duplicate, and noise."""
    return [
        TextFragment("Download 1920x1080 here", "http://a"),
        TextFragment("also 1,920x1,080 available", None),
        TextFragment("junk 3x3", "http://b"),
    ]


def make_record(width: int, height: int, original: str | None = None, link: str = "No link") -> ResolutionRecord:
    return ResolutionRecord(
        original=original or f"{width}x{height}",
        width=width,
        height=height,
        area=width * height,
        link=link,
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def sample_html() -> str:
    """A results page with linked, unlinked and noisy resolution mentions."""
    return """
    <html>
        <head>
            <title>Search results</title>
            <style>.w1920x1080 { width: 100px; }</style>
            <script>var size = "7680x4320";</script>
        </head>
        <body>
            <div class="result">
                <a href="/img/wallpaper-4k">Wallpaper 3840x2160</a>
                <span>Also available in 1,920X1,080 and 720p</span>
            </div>
            <div class="result">
                <p>Mirror: 3840x2160 (no link)</p>
                <a href="https://cdn.example.com/hd.jpg"><b>1920x1080</b></a>
            </div>
            <p>Zoom 2x3 and 5x500 are not resolutions.</p>
        </body>
    </html>
    """
