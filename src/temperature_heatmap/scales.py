"""
Scales for the heat map chart.

Maps data values to pixel positions and colors:

  - BandScale: discrete domain -> equal-width slots (years, months)
  - ThresholdScale: continuous domain -> one of N colors via breakpoints
  - LinearScale: continuous domain -> continuous pixel range (legend)

``build_scales`` derives all four chart scales from a Dataset.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass

from temperature_heatmap.datasources.global_temperature.client import MONTHS_PER_YEAR
from temperature_heatmap.schemas import Dataset, DatasetValidationError

# Cold -> hot, one color per temperature bucket
LEGEND_COLORS: tuple[str, ...] = (
    "#313695",
    "#4575b4",
    "#74add1",
    "#abd9e9",
    "#e0f3f8",
    "#ffffbf",
    "#fee090",
    "#fdae61",
    "#f46d43",
    "#d73027",
    "#a50026",
)

LEGEND_WIDTH = 400  # px


class BandScale:
    """Discrete scale allocating one equal-width band per domain value.

    Duplicate domain values are dropped, keeping first-appearance order.
    With ``round_=True`` the step is floored to whole pixels and the
    leftover space is split evenly before and after the bands.
    """

    def __init__(
        self,
        domain: Iterable[Hashable],
        range_: tuple[float, float],
        *,
        round_: bool = False,
    ) -> None:
        self.domain: list[Hashable] = list(dict.fromkeys(domain))
        self.range = range_
        self.round = round_

        start, stop = range_
        n = len(self.domain)
        step = (stop - start) / n if n else 0.0
        if round_:
            step = math.floor(step)
            start = round(start + (stop - start - step * n) / 2)
        self.step = step
        self._start = start
        self._index = {value: i for i, value in enumerate(self.domain)}

    @property
    def bandwidth(self) -> float:
        return self.step

    def __call__(self, value: Hashable) -> float | None:
        """Start position of ``value``'s band, or None if not in the domain."""
        i = self._index.get(value)
        if i is None:
            return None
        return self._start + i * self.step

    def center(self, value: Hashable) -> float | None:
        """Midpoint of ``value``'s band, used for axis tick placement."""
        pos = self(value)
        return None if pos is None else pos + self.step / 2


class ThresholdScale:
    """Maps a continuous value to one of ``len(breakpoints) + 1`` outputs.

    A value equal to a breakpoint belongs to the bucket above it. The first
    bucket is unbounded below and the last unbounded above.
    """

    def __init__(self, breakpoints: Sequence[float], colors: Sequence[str]) -> None:
        if len(colors) != len(breakpoints) + 1:
            msg = f"Need {len(breakpoints) + 1} colors for {len(breakpoints)} breakpoints"
            raise ValueError(msg)
        self.breakpoints = list(breakpoints)
        self.colors = list(colors)

    def __call__(self, value: float) -> str:
        return self.colors[bisect_right(self.breakpoints, value)]

    def invert_extent(self, color: str) -> tuple[float | None, float | None]:
        """Return the ``(lower, upper)`` bounds of a color's bucket.

        None marks an unbounded end.
        """
        i = self.colors.index(color)
        lower = self.breakpoints[i - 1] if i > 0 else None
        upper = self.breakpoints[i] if i < len(self.breakpoints) else None
        return lower, upper


class LinearScale:
    """Continuous linear mapping from ``domain`` onto ``range_``."""

    def __init__(self, domain: tuple[float, float], range_: tuple[float, float]) -> None:
        self.domain = domain
        self.range = range_

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        # A zero-width domain maps everything to the middle of the range
        t = (value - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)


def equal_width_breakpoints(minimum: float, maximum: float, count: int) -> list[float]:
    """Interior breakpoints splitting ``[minimum, maximum]`` into ``count`` buckets."""
    step = (maximum - minimum) / count
    return [minimum + i * step for i in range(1, count)]


@dataclass
class HeatmapScales:
    """All scales needed to draw one heat map."""

    x: BandScale
    y: BandScale
    color: ThresholdScale
    legend_x: LinearScale
    min_temp: float
    max_temp: float


def build_scales(
    dataset: Dataset,
    width: float,
    height: float,
    *,
    legend_width: float = LEGEND_WIDTH,
    colors: Sequence[str] = LEGEND_COLORS,
) -> HeatmapScales:
    """
    Derive the chart scales from a dataset.

    Args:
        dataset: Dataset with zero-indexed months.
        width: Plot width in pixels (x band range).
        height: Plot height in pixels (y band range).
        legend_width: Legend strip width in pixels.
        colors: Bucket colors, cold to hot.

    Raises:
        DatasetValidationError: If the dataset has no records.
    """
    if not dataset.monthly_variance:
        msg = "Cannot build scales for a dataset with no records"
        raise DatasetValidationError(msg)

    min_temp, max_temp = dataset.temperature_range()

    return HeatmapScales(
        x=BandScale(dataset.years, (0, width)),
        y=BandScale(range(MONTHS_PER_YEAR), (0, height), round_=True),
        color=ThresholdScale(
            equal_width_breakpoints(min_temp, max_temp, len(colors)),
            colors,
        ),
        legend_x=LinearScale((min_temp, max_temp), (0, legend_width)),
        min_temp=min_temp,
        max_temp=max_temp,
    )
