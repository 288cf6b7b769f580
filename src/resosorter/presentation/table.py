"""
Terminal rendering of ranked resolution records.
"""

from __future__ import annotations

import json
from typing import Dict, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from ..extractor.models import NO_LINK, ResolutionRecord
from ..extractor.protocols import RecordPresenter
from ..ranking.ranker import SortKey

TITLE = "Resolution Sorter"
EMPTY_MESSAGE = "No valid resolutions found."

COLUMNS = [
    (SortKey.ORIGINAL, "Resolution"),
    (SortKey.WIDTH, "Width"),
    (SortKey.HEIGHT, "Height"),
    (SortKey.AREA, "Area (pixels)"),
    (SortKey.LINK, "Link"),
]

THEME_STYLES: Dict[str, Dict[str, str]] = {
    "light": {
        "header": "bold #333333 on #f4f4f4",
        "row": "#333333",
        "row_even": "#333333 on #f9f9f9",
        "border": "#cccccc",
        "link": "#013220",
        "muted": "#888888",
    },
    "dark": {
        "header": "bold #eeeeee on #444444",
        "row": "#eeeeee on #333333",
        "row_even": "#eeeeee on #3a3a3a",
        "border": "#555555",
        "link": "#90ee90",
        "muted": "#aaaaaa",
    },
}

LINK_COLUMN_WIDTH = 40


def format_area(area: int) -> str:
    return f"{area:,}"


class RichTablePresenter(RecordPresenter):
    """Renders records as a rich table, honouring theme and collapsed state."""

    def __init__(
        self,
        console: Optional[Console] = None,
        *,
        theme: str = "light",
        collapsed: bool = False,
        sort_key: Optional[SortKey] = None,
        ascending: bool = False,
    ) -> None:
        self.console = console or Console()
        self.styles = THEME_STYLES.get(theme, THEME_STYLES["light"])
        self.collapsed = collapsed
        self.sort_key = sort_key
        self.ascending = ascending

    def _header_label(self, key: SortKey, label: str) -> str:
        if key is not self.sort_key:
            return label
        return f"{label} {'▲' if self.ascending else '▼'}"

    def build_table(self, records: Sequence[ResolutionRecord]) -> Table:
        table = Table(
            title=TITLE,
            header_style=self.styles["header"],
            border_style=self.styles["border"],
            row_styles=[self.styles["row"], self.styles["row_even"]],
        )
        for key, label in COLUMNS:
            if key is SortKey.LINK:
                table.add_column(
                    self._header_label(key, label), max_width=LINK_COLUMN_WIDTH, overflow="ellipsis", no_wrap=True
                )
            elif key.is_numeric:
                table.add_column(self._header_label(key, label), justify="right")
            else:
                table.add_column(self._header_label(key, label))

        if not records:
            table.add_row(Text(EMPTY_MESSAGE, style=self.styles["muted"]), "", "", "", "")
            return table

        for record in records:
            table.add_row(
                record.original,
                str(record.width),
                str(record.height),
                format_area(record.area),
                self._link_cell(record.link),
            )
        return table

    def _link_cell(self, link: str) -> Text:
        if link == NO_LINK:
            return Text(NO_LINK, style=self.styles["muted"])
        return Text(link, style=Style.parse(self.styles["link"]) + Style(link=link))

    def render(self, records: Sequence[ResolutionRecord]) -> None:
        if self.collapsed:
            self.console.print(
                Panel.fit(f"[bold]{TITLE}[/bold] ({len(records)} hidden)", border_style=self.styles["border"])
            )
            return
        self.console.print(self.build_table(records))


def render_json(records: Sequence[ResolutionRecord]) -> str:
    """Serialize records in their current order."""
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)
