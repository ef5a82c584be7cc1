"""Hover tooltip content and state.

The page carries a single tooltip element shared by every cell. Its
behaviour in the browser (see ``heatmap_script.html.j2``) mirrors
``TooltipState``: pointer-enter on a cell rewrites and shows the tooltip
east of the cell, pointer-leave hides it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from markupsafe import Markup

from temperature_heatmap.renderers.formatting import (
    format_temperature,
    format_variance,
    format_year_month,
)

if TYPE_CHECKING:
    from temperature_heatmap.renderers.heatmap import Cell

TOOLTIP_ID = "tooltip"
TOOLTIP_CLASS = "d3-tip"
TOOLTIP_DIRECTION = "e"
# (top, left) in px
TOOLTIP_OFFSET = (-20, 0)


def tooltip_html(year: int, month: int, temperature: float, variance: float) -> Markup:
    """Tooltip body for one cell: date, absolute temperature, variance."""
    return Markup(
        "<span class='date'>{}</span><br/>"
        "<span class='temperature'>{}</span><br/>"
        "<span class='variance'>{}</span>"
    ).format(
        format_year_month(year, month),
        format_temperature(temperature),
        format_variance(variance),
    )


@dataclass
class TooltipAnchor:
    """Tooltip position in drawing-surface pixels."""

    left: float
    top: float


class TooltipState:
    """The shared tooltip: hidden, or shown for exactly one cell."""

    def __init__(self, offset: tuple[float, float] = TOOLTIP_OFFSET) -> None:
        self.offset = offset
        self.visible = False
        self.html = Markup("")
        self.data_year: int | None = None
        self.anchor: TooltipAnchor | None = None
        self.cell: Cell | None = None
        self.toggles = 0

    @property
    def visibility(self) -> str:
        """CSS ``visibility`` value for the tooltip element."""
        return "visible" if self.visible else "hidden"

    def show(
        self,
        cell: Cell,
        origin: tuple[float, float] = (0, 0),
        tip_height: float = 0.0,
    ) -> None:
        """Rewrite the tooltip for ``cell`` and anchor it to the cell's east side.

        The tooltip is vertically centred on the cell, so its top edge sits
        half its own height above the cell's midline before the offset.

        Args:
            cell: The hovered cell.
            origin: ``(left, top)`` of the plot area on the drawing surface.
            tip_height: Rendered height of the tooltip box.
        """
        offset_top, offset_left = self.offset
        self.html = cell.tooltip
        self.data_year = cell.year
        self.cell = cell
        self.anchor = TooltipAnchor(
            left=origin[0] + cell.x + cell.width + offset_left,
            top=origin[1] + cell.y + cell.height / 2 - tip_height / 2 + offset_top,
        )
        if not self.visible:
            self.visible = True
            self.toggles += 1

    def hide(self) -> None:
        if self.visible:
            self.visible = False
            self.toggles += 1
        self.cell = None

    def reset(self) -> None:
        """Return to the initial hidden, empty state."""
        self.visible = False
        self.html = Markup("")
        self.data_year = None
        self.anchor = None
        self.cell = None
        self.toggles = 0
