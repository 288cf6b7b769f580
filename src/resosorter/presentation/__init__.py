"""Presentation of ranked records: rich tables for terminals, JSON for machines."""

from .table import EMPTY_MESSAGE, RichTablePresenter, format_area, render_json

__all__ = ["EMPTY_MESSAGE", "RichTablePresenter", "format_area", "render_json"]
