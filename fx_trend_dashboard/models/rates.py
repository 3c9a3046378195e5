"""Rate snapshots and historical series."""

from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from enum import Enum
from typing import Iterable

import pandas as pd


@dataclass(frozen=True)
class RateSnapshot:
    """Latest rates for every target currency against one base."""

    base: str
    rates: dict[str, float]

    def rate_for(self, code: str) -> float | None:
        return self.rates.get(code)


@dataclass(frozen=True)
class RatePoint:
    """Single rate observation, `offset` days before today."""

    offset: int
    rate: float


class Trend(str, Enum):
    """Direction of a series from first to last point."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


@dataclass(frozen=True)
class HistoricalSeries:
    """Seven days of rates for a currency pair, oldest first."""

    base: str
    target: str
    historical: tuple[RatePoint, ...]
    used_fallback: bool = False
    projected: tuple[RatePoint, ...] = field(default=())
    as_of: date | None = None

    @property
    def rates(self) -> list[float]:
        return [p.rate for p in self.historical]

    @property
    def offsets(self) -> list[int]:
        return [p.offset for p in self.historical]

    @property
    def pair(self) -> str:
        return f"{self.base}/{self.target}"

    def with_projection(self, points: Iterable[RatePoint]) -> "HistoricalSeries":
        return replace(self, projected=tuple(points))

    def to_frame(self, today: date | None = None) -> pd.DataFrame:
        """
        Flatten historical and projected points into one DataFrame.

        Historical offsets count back from `today`, which defaults to the
        day the series was fetched. The first projected point
        repeats the last historical one and each following point is one day
        further ahead.

        Returns:
            DataFrame with offset, date, rate and kind columns
        """
        today = today or self.as_of or date.today()
        records = [
            {
                "offset": p.offset,
                "date": today - timedelta(days=p.offset),
                "rate": p.rate,
                "kind": "historical",
            }
            for p in self.historical
        ]
        if self.projected:
            anchor = self.projected[0].offset
            for p in self.projected:
                records.append({
                    "offset": p.offset,
                    "date": today - timedelta(days=anchor) + timedelta(days=p.offset - anchor),
                    "rate": p.rate,
                    "kind": "projected",
                })

        df = pd.DataFrame(records, columns=["offset", "date", "rate", "kind"])
        df["date"] = pd.to_datetime(df["date"])
        return df
