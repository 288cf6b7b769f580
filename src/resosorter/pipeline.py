"""
Extraction pipeline: fragments in, ranked resolution records out.

One pass runs Matcher → candidate extraction → canonicalization → validation
synchronously and to completion, then hands the records to a Ranker. The pass
holds no reference to any rendering surface; presenters read the ranker.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple
from uuid import uuid4

import structlog
from structlog.contextvars import bound_contextvars

from .config.config import Config, settings
from .dedup.canonical import CandidateCanonicalizer
from .extractor.candidates import extract_candidates
from .extractor.models import ResolutionRecord, TextFragment
from .observability.metrics import METRICS
from .parsing.validator import ResolutionValidator
from .ranking.ranker import Ranker

logger = structlog.get_logger(__name__)


@dataclass
class ScanResult:
    """Outcome of one extraction pass."""

    scan_id: str
    ranker: Ranker
    stats: Dict[str, int] = field(default_factory=dict)
    duration: float = 0.0

    @property
    def is_empty(self) -> bool:
        """Explicit empty-state signal; zero records is not an error."""
        return self.ranker.is_empty

    @property
    def records(self) -> Tuple[ResolutionRecord, ...]:
        return self.ranker.records


class ResolutionPipeline:
    """
    Runs the extraction stages in order and assembles a ranked result.

    Without an explicit config the lazily loaded global settings apply.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or settings
        self.logger = logger.bind(component="ResolutionPipeline")

    def run(self, fragments: Iterable[TextFragment]) -> ScanResult:
        """
        Execute one extraction pass.

        Args:
            fragments: Host-supplied text fragments

        Returns:
            ScanResult holding the ranker and per-stage counts
        """
        scan_id = uuid4().hex[:12]
        metrics_enabled = self.config.monitoring.metrics_enabled
        start = time.perf_counter()

        with bound_contextvars(scan_id=scan_id):
            candidates = list(extract_candidates(fragments))

            canonicalizer = CandidateCanonicalizer(fold_separators=self.config.dedup.fold_separators)
            unique = canonicalizer.deduplicate(candidates)

            validator = ResolutionValidator(metrics_enabled=metrics_enabled)
            records = validator.validate_all(unique)

            ranker = Ranker(
                records,
                initial_key=self.config.ranking.default_key,
                initial_ascending=self.config.ranking.default_ascending,
            )

            duration = time.perf_counter() - start
            if metrics_enabled:
                METRICS["scan_duration_seconds"].observe(duration)

            stats = {
                "candidates": len(candidates),
                "unique": len(unique),
                "records": len(records),
                **validator.get_stats(),
            }
            if ranker.is_empty:
                self.logger.info("No valid resolutions found", **stats)
            else:
                self.logger.info("Scan completed", duration=round(duration, 6), **stats)

        return ScanResult(scan_id=scan_id, ranker=ranker, stats=stats, duration=duration)


def scan_fragments(fragments: Iterable[TextFragment], config: Optional[Config] = None) -> ScanResult:
    """Convenience wrapper for a single extraction pass."""
    return ResolutionPipeline(config).run(fragments)
