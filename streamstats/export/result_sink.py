import json
import math
import sys
from typing import Optional

OUTPUT_FORMATS = ("text", "json")


def format_value(value: float) -> str:
    # same rendering as a default C++ output stream: six significant digits
    return "%g" % value


def report_to_dict(report) -> dict:
    return {
        "ok": report.ok,
        "run_id": report.run_id,
        "created_at_ms": report.created_at_ms,
        "source": report.source,
        "samples": report.samples,
        "statistics": {
            r.name: (r.value if math.isfinite(r.value) else None) for r in report.results
        },
    }


class ResultSink:
    def __init__(self, stream=None, output_format: str = "text") -> None:
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {output_format!r} (expected one of {OUTPUT_FORMATS})")
        self.stream = stream
        self.output_format = output_format

    def write(self, report, output_format: Optional[str] = None) -> None:
        fmt = output_format or self.output_format
        out = self.stream if self.stream is not None else sys.stdout

        if fmt == "json":
            out.write(json.dumps(report_to_dict(report), indent=2, allow_nan=False) + "\n")
        elif fmt == "text":
            for r in report.results:
                out.write(f"{r.name} = {format_value(r.value)}\n")
        else:
            raise ValueError(f"Unknown output format: {fmt!r}")
        out.flush()
