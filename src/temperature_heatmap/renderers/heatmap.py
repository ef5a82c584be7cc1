"""Heat map renderer.

Title, description, month and decade axes, threshold legend, and one SVG
rect per monthly record. Returns the container markup and the hover script
that drives the shared tooltip.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from markupsafe import Markup

from temperature_heatmap.datasources.global_temperature.client import MONTHS_PER_YEAR
from temperature_heatmap.renderers import render_template
from temperature_heatmap.renderers.formatting import (
    MONTH_NAMES,
    format_number,
    format_temperature,
    format_tick,
    format_variance,
    month_name,
)
from temperature_heatmap.renderers.tooltip import (
    TOOLTIP_CLASS,
    TOOLTIP_DIRECTION,
    TOOLTIP_ID,
    TooltipState,
    tooltip_html,
)
from temperature_heatmap.scales import LEGEND_WIDTH, BandScale, HeatmapScales, build_scales
from temperature_heatmap.schemas import Dataset, DatasetValidationError

TITLE = "Monthly Global Land-Surface Temperature"

FONT_SIZE = 16  # px
CELL_WIDTH = 5  # px per year
CELL_HEIGHT = 35  # px per month
TICK_SIZE = 6  # px

LEGEND_HEIGHT = 300 / 11  # px


@dataclass(frozen=True)
class Padding:
    left: float
    right: float
    top: float
    bottom: float

    @classmethod
    def from_font_size(cls, font_size: float = FONT_SIZE) -> Padding:
        """Room for axis labels and the legend, in font units."""
        return cls(
            left=9 * font_size,
            right=9 * font_size,
            top=1 * font_size,
            bottom=8 * font_size,
        )


@dataclass(frozen=True)
class Layout:
    """Plot size plus the padding around it."""

    width: float
    height: float
    padding: Padding = field(default_factory=Padding.from_font_size)

    @classmethod
    def for_dataset(cls, dataset: Dataset) -> Layout:
        """One CELL_WIDTH column per year of records, one CELL_HEIGHT row per month."""
        n_years = math.ceil(len(dataset.monthly_variance) / MONTHS_PER_YEAR)
        return cls(width=CELL_WIDTH * n_years, height=CELL_HEIGHT * MONTHS_PER_YEAR)

    @property
    def svg_width(self) -> float:
        return self.width + self.padding.left + self.padding.right

    @property
    def svg_height(self) -> float:
        return self.height + self.padding.top + self.padding.bottom

    @property
    def origin(self) -> tuple[float, float]:
        """Top-left corner of the plot area on the drawing surface."""
        return (self.padding.left, self.padding.top)


@dataclass(frozen=True)
class Container:
    """The host element the chart is drawn into."""

    tag: str = "section"
    element_id: str = "heatmap"


@dataclass
class RenderContext:
    """Everything one render call draws with.

    Owned by the caller; use as a context manager so the shared tooltip is
    reset when the view goes away.
    """

    container: Container
    layout: Layout
    tooltip: TooltipState = field(default_factory=TooltipState)

    @classmethod
    def for_dataset(cls, dataset: Dataset, container: Container | None = None) -> RenderContext:
        return cls(container=container or Container(), layout=Layout.for_dataset(dataset))

    def close(self) -> None:
        self.tooltip.reset()

    def __enter__(self) -> RenderContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class Cell:
    """One year/month rect in plot coordinates."""

    index: int
    year: int
    month: int
    temperature: float
    variance: float
    x: float
    y: float
    width: float
    height: float
    fill: str

    @property
    def tooltip(self) -> Markup:
        return tooltip_html(self.year, self.month, self.temperature, self.variance)


@dataclass
class Tick:
    position: float
    label: str


@dataclass
class LegendSwatch:
    """One color bucket drawn on the legend strip."""

    color: str
    lower: float
    upper: float
    x: float
    width: float


def month_ticks(y: BandScale) -> list[Tick]:
    """One tick per month, at the band center."""
    return [
        Tick(position=y.center(m), label=month_name(m))  # type: ignore[arg-type]
        for m in y.domain
    ]


def decade_ticks(x: BandScale) -> list[Tick]:
    """Ticks only for years divisible by 10."""
    return [
        Tick(position=x.center(year), label=str(year))  # type: ignore[arg-type]
        for year in x.domain
        if year % 10 == 0  # type: ignore[operator]
    ]


def legend_swatches(scales: HeatmapScales) -> list[LegendSwatch]:
    """One swatch per color, sized by its bucket span on the legend scale.

    Edge buckets are unbounded, so they are clipped to the temperature range.
    """
    swatches = []
    for color in scales.color.colors:
        lower, upper = scales.color.invert_extent(color)
        lower = scales.min_temp if lower is None else lower
        upper = scales.max_temp if upper is None else upper
        x0 = scales.legend_x(lower)
        swatches.append(
            LegendSwatch(
                color=color,
                lower=lower,
                upper=upper,
                x=x0,
                width=scales.legend_x(upper) - x0,
            )
        )
    return swatches


def legend_ticks(scales: HeatmapScales) -> list[Tick]:
    """Legend axis labels at each breakpoint."""
    return [
        Tick(position=scales.legend_x(b), label=format_tick(b)) for b in scales.color.breakpoints
    ]


def build_cells(dataset: Dataset, scales: HeatmapScales) -> list[Cell]:
    """Position and color one cell per record."""
    base = dataset.base_temperature
    cells = []
    for i, record in enumerate(dataset.monthly_variance):
        temperature = record.temperature(base)
        cells.append(
            Cell(
                index=i,
                year=record.year,
                month=record.month,
                temperature=temperature,
                variance=record.variance,
                x=scales.x(record.year),  # type: ignore[arg-type]
                y=scales.y(record.month),  # type: ignore[arg-type]
                width=scales.x.bandwidth,
                height=scales.y.bandwidth,
                fill=scales.color(temperature),
            )
        )
    return cells


def _script_json(value: object) -> Markup:
    """JSON literal safe to embed in a <script> block."""
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return Markup(text.replace("</", "<\\/"))


def _tooltip_labels(cells: list[Cell]) -> list[list[str]]:
    """``[temperature, variance]`` labels per cell, indexed like ``data-index``.

    Year and month are already on each rect, so only the formatted values
    travel in the script payload.
    """
    return [[format_temperature(c.temperature), format_variance(c.variance)] for c in cells]


def build_heatmap_html(
    dataset: Dataset,
    context: RenderContext,
    scales: HeatmapScales | None = None,
) -> tuple[str, str]:
    """Build the heat map markup for a normalized dataset.

    Args:
        dataset: Dataset whose months have been normalized to 0-11.
        context: Container, layout and shared tooltip for this view.
        scales: Pre-built scales; derived from the dataset and layout if None.

    Returns:
        A (container_html, script_html) tuple.

    Raises:
        DatasetValidationError: If the dataset is empty or not normalized.
    """
    if not dataset.normalized:
        msg = "Dataset months must be normalized before rendering"
        raise DatasetValidationError(msg)

    layout = context.layout
    if scales is None:
        scales = build_scales(dataset, layout.width, layout.height, legend_width=LEGEND_WIDTH)

    cells = build_cells(dataset, scales)
    padding = layout.padding

    container_html = render_template(
        "heatmap.html.j2",
        container=context.container,
        title=TITLE,
        first_year=dataset.first_year,
        last_year=dataset.last_year,
        base_temperature=format_number(dataset.base_temperature),
        layout=layout,
        origin=layout.origin,
        tick_size=TICK_SIZE,
        month_ticks=month_ticks(scales.y),
        decade_ticks=decade_ticks(scales.x),
        legend_top=padding.top + layout.height + padding.bottom - 2 * LEGEND_HEIGHT,
        legend_height=LEGEND_HEIGHT,
        legend_width=scales.legend_x.range[1],
        legend_swatches=legend_swatches(scales),
        legend_ticks=legend_ticks(scales),
        cells=cells,
        tooltip=context.tooltip,
        tooltip_id=TOOLTIP_ID,
        tooltip_class=TOOLTIP_CLASS,
    )

    offset_top, offset_left = context.tooltip.offset
    script_html = render_template(
        "heatmap_script.html.j2",
        container_id=context.container.element_id,
        tooltip_id=TOOLTIP_ID,
        direction=TOOLTIP_DIRECTION,
        offset_top=offset_top,
        offset_left=offset_left,
        months_json=_script_json(MONTH_NAMES),
        labels_json=_script_json(_tooltip_labels(cells)),
    )

    return container_html, script_html
