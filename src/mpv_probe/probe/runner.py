"""Sequential batch probing over one reused player session."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from mpv_probe.classification.codecs import UnsupportedRuleSet
from mpv_probe.classification.report import evaluate
from mpv_probe.domain.models import ClassificationVerdict
from mpv_probe.logging.context import probe_context
from mpv_probe.player.interface import PlayerSession
from mpv_probe.probe.capability import probe

logger = logging.getLogger(__name__)


def run_batch(
    session: PlayerSession,
    files: Iterable[Path],
    rules: UnsupportedRuleSet,
    settle_delay_ms: int = 200,
) -> Iterator[ClassificationVerdict]:
    """Probe and classify files one at a time.

    Each file's probe finishes before the next file is loaded; the player
    only has one open file. Verdicts are yielded as they are produced so
    an interrupted run still has everything probed so far.

    Args:
        session: Live session reused for every file.
        files: Files to probe, in order.
        rules: Unsupported codec and container rules.
        settle_delay_ms: Pause between load and property reads.

    Yields:
        One verdict per file (failed probes yield unclassified verdicts).
    """
    for index, file_path in enumerate(files, start=1):
        with probe_context(file_path, index):
            logger.info("Probing %s", file_path)
            result = probe(session, file_path, settle_delay_ms)
            verdict = evaluate(result, rules)

            if not result.succeeded:
                logger.info("Failed: %s", result.error_message)
            elif verdict.would_require_conversion and verdict.reason is not None:
                logger.info(
                    "Loaded in %d ms; legacy pipeline would convert (%s)",
                    result.load_time_ms,
                    verdict.reason.label,
                )
            else:
                logger.info("Loaded in %d ms; plays directly", result.load_time_ms)

        yield verdict

        if not session.is_alive:
            logger.error("Player is no longer running; remaining files will fail")
