from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional
import logging
import time
import uuid

from streamstats.bench.metrics import Metrics
from streamstats.bench.reader import ValueReader
from streamstats.bench.types import RunReport

logger = logging.getLogger(__name__)


@dataclass
class StatsRunResult:
    ok: bool
    run_id: str
    report: RunReport


class StatsRunner:
    """
    Pure orchestrator:

      1) ValueReader turns the input stream into numbers
      2) every number is forwarded to each statistic in Metrics
      3) statistics are evaluated once at end of input
      4) ResultSink renders the report

    InvalidInputError from the reader propagates untouched; nothing is
    written to the sink in that case.
    """

    def __init__(self, reader: ValueReader, result_sink, metrics_factory=Metrics) -> None:
        self.reader = reader
        self.sink = result_sink
        self.metrics_factory = metrics_factory

    def run(self, lines: Iterable[str], source: str = "<stdin>", output_format: Optional[str] = None) -> StatsRunResult:
        run_id = str(uuid.uuid4())
        created_at_ms = int(time.time() * 1000)

        metrics = self.metrics_factory()
        metrics.aggregate(self.reader.values(lines))

        if metrics.samples == 0:
            logger.info("No values read from %s", source)
        else:
            logger.debug("Read %d values from %s", metrics.samples, source)

        report = RunReport(
            ok=True,
            run_id=run_id,
            created_at_ms=created_at_ms,
            source=source,
            samples=metrics.samples,
            results=metrics.evaluate(),
        )

        self.sink.write(report, output_format=output_format)

        return StatsRunResult(ok=report.ok, run_id=run_id, report=report)
