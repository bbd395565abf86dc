import math
from typing import Iterable, List, Optional

from streamstats.bench.types import StatResult


class Statistic:
    """
    Accumulator over a stream of observations.

    Subclasses implement update(value), eval() and name(). eval() is a pure
    query: calling it repeatedly without new updates returns the same value.
    """

    def update(self, value: float) -> None:
        raise NotImplementedError

    def eval(self) -> float:
        raise NotImplementedError

    def name(self) -> str:
        raise NotImplementedError


class Min(Statistic):
    def __init__(self) -> None:
        self._min = math.inf
        self._seen = False

    def update(self, value: float) -> None:
        self._seen = True
        if value < self._min:
            self._min = value

    def eval(self) -> float:
        return self._min if self._seen else math.nan

    def name(self) -> str:
        return "min"


class Max(Statistic):
    def __init__(self) -> None:
        self._max = -math.inf
        self._seen = False

    def update(self, value: float) -> None:
        self._seen = True
        if value > self._max:
            self._max = value

    def eval(self) -> float:
        return self._max if self._seen else math.nan

    def name(self) -> str:
        return "max"


class Mean(Statistic):
    def __init__(self) -> None:
        self._sum = 0.0
        self._count = 0

    def update(self, value: float) -> None:
        self._sum += value
        self._count += 1

    def eval(self) -> float:
        return self._sum / self._count if self._count else 0.0

    def name(self) -> str:
        return "mean"


class Percentile(Statistic):
    """
    p-th quantile (0 <= p <= 1) with linear interpolation between the two
    nearest order statistics:

      r = p * (n - 1)
      r integral -> sorted[r]
      otherwise  -> lower + (r - floor(r)) * (upper - lower)

    Observations are kept unordered; every eval() sorts a copy.
    """

    def __init__(self, p: float, label: Optional[str] = None) -> None:
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"Percentile must be within [0, 1], got {p}")
        self.p = p
        self._label = label or f"Pct{round(p * 100):g}"
        self._values: List[float] = []

    def update(self, value: float) -> None:
        self._values.append(value)

    def eval(self) -> float:
        if not self._values:
            return math.nan

        ordered = sorted(self._values)
        rank = self.p * (len(ordered) - 1)
        lower_index = int(math.floor(rank))
        if rank == lower_index:
            return ordered[lower_index]

        lower = ordered[lower_index]
        upper = ordered[lower_index + 1]
        return lower + (rank - lower_index) * (upper - lower)

    def name(self) -> str:
        return self._label


def default_statistics() -> List[Statistic]:
    # registration order is the report order
    return [
        Min(),
        Max(),
        Mean(),
        Percentile(0.90, "Pct90"),
        Percentile(0.95, "Pct95"),
    ]


class Metrics:
    """Fixed, ordered collection of statistics fed from a single value stream."""

    def __init__(self, statistics: Optional[Iterable[Statistic]] = None) -> None:
        self.statistics = list(statistics) if statistics is not None else default_statistics()
        self.samples = 0

    def update(self, value: float) -> None:
        for stat in self.statistics:
            stat.update(value)
        self.samples += 1

    def aggregate(self, values: Iterable[float]) -> "Metrics":
        for value in values:
            self.update(value)
        return self

    def evaluate(self) -> List[StatResult]:
        return [StatResult(name=s.name(), value=s.eval()) for s in self.statistics]
