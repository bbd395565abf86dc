from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class StatsConfig:
    input_path: Optional[str]   # None or "-" means stdin
    output_format: str          # "text" | "json"
    log_level: str              # logging level name, e.g. "WARNING"


@dataclass
class StatResult:
    name: str
    value: float


@dataclass
class RunReport:
    ok: bool
    run_id: str
    created_at_ms: int
    source: str                 # "<stdin>" or the input path
    samples: int
    results: List[StatResult] = field(default_factory=list)
