"""
Tests for the heat map renderer, tooltip state and label formatting.
"""

from __future__ import annotations

import json
import re

import pytest

from temperature_heatmap.datasources.global_temperature import normalize_months
from temperature_heatmap.renderers import px
from temperature_heatmap.renderers.formatting import (
    format_number,
    format_temperature,
    format_tick,
    format_variance,
    format_year_month,
    month_name,
)
from temperature_heatmap.renderers.heatmap import (
    Container,
    Layout,
    Padding,
    RenderContext,
    build_cells,
    build_heatmap_html,
    decade_ticks,
    legend_swatches,
    legend_ticks,
    month_ticks,
)
from temperature_heatmap.renderers.tooltip import TooltipState, tooltip_html
from temperature_heatmap.scales import LEGEND_COLORS, LEGEND_WIDTH, BandScale, build_scales
from temperature_heatmap.schemas import Dataset, DatasetValidationError


def make_dataset(
    first_year: int = 1999,
    last_year: int = 2001,
    base: float = 8.66,
) -> Dataset:
    """Full years of raw (1-12) months with a variance that rises over time."""
    records = []
    for year in range(first_year, last_year + 1):
        for month in range(1, 13):
            records.append(
                {"year": year, "month": month, "variance": (year - first_year) + month / 10 - 1}
            )
    return Dataset.model_validate({"baseTemperature": base, "monthlyVariance": records})


def scenario_dataset() -> Dataset:
    dataset = Dataset.model_validate(
        {
            "baseTemperature": 8.66,
            "monthlyVariance": [{"year": 1753, "month": 1, "variance": -1.366}],
        }
    )
    return normalize_months(dataset)


# =============================================================================
# Formatting
# =============================================================================


class TestFormatting:
    """Label formatting for axes, legend and tooltip."""

    def test_month_names_zero_indexed(self) -> None:
        assert month_name(0) == "January"
        assert month_name(11) == "December"

    def test_year_month(self) -> None:
        assert format_year_month(1753, 0) == "1753 - January"

    @pytest.mark.parametrize(
        ("celsius", "expected"),
        [(7.294, "7.3 °C"), (12.0, "12.0 °C"), (-0.04, "0.0 °C")],
    )
    def test_temperature(self, celsius: float, expected: str) -> None:
        assert format_temperature(celsius) == expected

    @pytest.mark.parametrize(
        ("celsius", "expected"),
        [(-1.366, "-1.4 °C"), (0.25, "+0.2 °C"), (1.0, "+1.0 °C"), (-0.04, "+0.0 °C")],
    )
    def test_variance_signed(self, celsius: float, expected: str) -> None:
        assert format_variance(celsius) == expected

    def test_tick(self) -> None:
        assert format_tick(2.8571) == "2.9"

    def test_number(self) -> None:
        assert format_number(8.66) == "8.66"
        assert format_number(9.0) == "9"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(5.0, "5"), (400, "400"), (27.272727, "27.27"), (0, "0"), (-0.001, "0"), (2.5, "2.5")],
    )
    def test_px(self, value: float, expected: str) -> None:
        assert px(value) == expected


# =============================================================================
# Layout and context
# =============================================================================


class TestLayout:
    def test_padding_from_font_size(self) -> None:
        assert Padding.from_font_size(16) == Padding(left=144, right=144, top=16, bottom=128)

    def test_dimensions_from_record_count(self) -> None:
        layout = Layout.for_dataset(make_dataset(1999, 2001))
        assert layout.width == 15
        assert layout.height == 420
        assert layout.svg_width == 15 + 288
        assert layout.svg_height == 420 + 144
        assert layout.origin == (144, 16)

    def test_partial_year_rounds_up(self) -> None:
        layout = Layout.for_dataset(scenario_dataset())
        assert layout.width == 5


class TestRenderContext:
    def test_defaults(self) -> None:
        context = RenderContext.for_dataset(make_dataset())
        assert context.container == Container(tag="section", element_id="heatmap")
        assert context.tooltip.visible is False

    def test_close_resets_tooltip(self) -> None:
        dataset = scenario_dataset()
        with RenderContext.for_dataset(dataset) as context:
            scales = build_scales(dataset, context.layout.width, context.layout.height)
            context.tooltip.show(build_cells(dataset, scales)[0])
            assert context.tooltip.visible is True
        assert context.tooltip.visible is False
        assert context.tooltip.toggles == 0
        assert context.tooltip.data_year is None


# =============================================================================
# Axes, legend, cells
# =============================================================================


class TestAxes:
    def test_month_ticks_all_twelve(self) -> None:
        ticks = month_ticks(BandScale(range(12), (0, 420), round_=True))
        assert [t.label for t in ticks] == [
            "January",
            "February",
            "March",
            "April",
            "May",
            "June",
            "July",
            "August",
            "September",
            "October",
            "November",
            "December",
        ]
        assert ticks[0].position == 17.5

    def test_decade_ticks_full_range(self) -> None:
        ticks = decade_ticks(BandScale(range(1753, 2016), (0, 5 * 263)))
        labels = [t.label for t in ticks]
        assert labels == [str(y) for y in range(1760, 2020, 10)]
        assert "1753" not in labels
        assert "2015" not in labels

    def test_decade_tick_positions(self) -> None:
        ticks = decade_ticks(BandScale(range(1753, 2016), (0, 5 * 263)))
        assert ticks[0].position == (1760 - 1753) * 5 + 2.5

    def test_decade_ticks_include_edge_years_on_decade(self) -> None:
        ticks = decade_ticks(BandScale(range(1990, 2011), (0, 105)))
        assert [t.label for t in ticks] == ["1990", "2000", "2010"]


class TestLegend:
    def test_swatch_widths_sum_to_legend_width(self) -> None:
        dataset = normalize_months(make_dataset())
        scales = build_scales(dataset, 15, 420)
        swatches = legend_swatches(scales)
        assert len(swatches) == 11
        assert sum(s.width for s in swatches) == pytest.approx(LEGEND_WIDTH)
        assert swatches[0].x == 0
        assert swatches[-1].x + swatches[-1].width == pytest.approx(LEGEND_WIDTH)

    def test_swatches_proportional_and_clipped(self) -> None:
        dataset = normalize_months(make_dataset())
        scales = build_scales(dataset, 15, 420)
        swatches = legend_swatches(scales)
        assert swatches[0].lower == scales.min_temp
        assert swatches[-1].upper == scales.max_temp
        for swatch in swatches:
            assert swatch.width == pytest.approx(LEGEND_WIDTH / 11)
        assert [s.color for s in swatches] == list(LEGEND_COLORS)

    def test_swatches_with_zero_crossing_range(self) -> None:
        # Temperatures spanning 0 °C; every bucket still gets its width
        dataset = normalize_months(make_dataset(base=-1.0))
        scales = build_scales(dataset, 15, 420)
        assert scales.min_temp < 0 < scales.max_temp
        widths = [s.width for s in legend_swatches(scales)]
        assert all(w == pytest.approx(LEGEND_WIDTH / 11) for w in widths)

    def test_legend_ticks_one_decimal(self) -> None:
        dataset = Dataset.model_validate(
            {
                "baseTemperature": 0.0,
                "monthlyVariance": [
                    {"year": 2000, "month": 1, "variance": 0.0},
                    {"year": 2000, "month": 2, "variance": 11.0},
                ],
            }
        )
        scales = build_scales(normalize_months(dataset), 5, 420)
        ticks = legend_ticks(scales)
        assert [t.label for t in ticks] == [f"{i}.0" for i in range(1, 11)]
        assert ticks[0].position == pytest.approx(LEGEND_WIDTH / 11)


class TestCells:
    def test_one_cell_per_record(self) -> None:
        dataset = normalize_months(make_dataset())
        scales = build_scales(dataset, 15, 420)
        cells = build_cells(dataset, scales)
        assert len(cells) == 36

    def test_cell_position_and_size(self) -> None:
        dataset = normalize_months(make_dataset())
        scales = build_scales(dataset, 15, 420)
        cell = build_cells(dataset, scales)[13]  # 2000, February
        assert (cell.year, cell.month) == (2000, 1)
        assert (cell.x, cell.y) == (5, 35)
        assert (cell.width, cell.height) == (5, 35)

    def test_cell_fill_matches_color_scale(self) -> None:
        dataset = normalize_months(make_dataset())
        scales = build_scales(dataset, 15, 420)
        cells = build_cells(dataset, scales)
        assert cells[0].fill == LEGEND_COLORS[0]
        assert cells[-1].fill == LEGEND_COLORS[-1]
        for cell in cells:
            assert cell.fill == scales.color(cell.temperature)

    def test_scenario_labels(self) -> None:
        dataset = scenario_dataset()
        scales = build_scales(dataset, 5, 420)
        cell = build_cells(dataset, scales)[0]
        assert cell.month == 0
        assert cell.temperature == pytest.approx(7.294)
        assert "7.3 °C" in cell.tooltip
        assert "-1.4 °C" in cell.tooltip


# =============================================================================
# Tooltip
# =============================================================================


class TestTooltip:
    """A single shared tooltip toggled by hover and unhover."""

    @pytest.fixture
    def cells(self) -> list:
        dataset = normalize_months(make_dataset())
        return build_cells(dataset, build_scales(dataset, 15, 420))

    def test_tooltip_html(self) -> None:
        html = tooltip_html(1753, 0, 7.294, -1.366)
        assert "<span class='date'>1753 - January</span>" in html
        assert "<span class='temperature'>7.3 °C</span>" in html
        assert "<span class='variance'>-1.4 °C</span>" in html

    def test_starts_hidden(self) -> None:
        tooltip = TooltipState()
        assert tooltip.visible is False
        assert tooltip.toggles == 0

    def test_hover_unhover_toggles_twice(self, cells: list) -> None:
        tooltip = TooltipState()
        tooltip.show(cells[0])
        assert tooltip.visible is True
        assert "1999 - January" in tooltip.html
        tooltip.hide()
        assert tooltip.visible is False
        assert tooltip.toggles == 2

    def test_shared_and_rewritten(self, cells: list) -> None:
        tooltip = TooltipState()
        tooltip.show(cells[0])
        tooltip.show(cells[13])
        assert tooltip.toggles == 1
        assert "2000 - February" in tooltip.html
        assert tooltip.data_year == 2000
        assert tooltip.cell is cells[13]

    def test_hide_when_hidden_is_noop(self) -> None:
        tooltip = TooltipState()
        tooltip.hide()
        assert tooltip.toggles == 0

    def test_anchored_east_with_offset(self, cells: list) -> None:
        tooltip = TooltipState()
        cell = cells[13]  # x=5, y=35, 5x35
        tooltip.show(cell, origin=(144, 16))
        assert tooltip.anchor is not None
        assert tooltip.anchor.left == 144 + 5 + 5 + 0
        assert tooltip.anchor.top == 16 + 35 + 17.5 - 20

    def test_vertically_centred_on_cell(self, cells: list) -> None:
        tooltip = TooltipState()
        cell = cells[13]
        tooltip.show(cell, origin=(144, 16), tip_height=54)
        assert tooltip.anchor is not None
        # Tooltip midline sits on the cell midline, shifted by the top offset
        assert tooltip.anchor.top + 54 / 2 == 16 + 35 + 17.5 - 20

    def test_visibility_follows_state(self, cells: list) -> None:
        tooltip = TooltipState()
        assert tooltip.visibility == "hidden"
        tooltip.show(cells[0])
        assert tooltip.visibility == "visible"
        tooltip.hide()
        assert tooltip.visibility == "hidden"


# =============================================================================
# Full render
# =============================================================================


class TestBuildHeatmapHtml:
    """Container markup and hover script."""

    @pytest.fixture
    def rendered(self) -> tuple[str, str]:
        dataset = normalize_months(make_dataset())
        with RenderContext.for_dataset(dataset) as context:
            return build_heatmap_html(dataset, context)

    def test_title_and_description(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        assert '<h1 id="title">Monthly Global Land-Surface Temperature</h1>' in html
        assert "From 1999 to 2001, base temperature 8.66°C." in html

    def test_container_wraps_chart(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        assert html.lstrip().startswith('<section id="heatmap"')
        assert html.rstrip().endswith("</section>")

    def test_custom_container(self) -> None:
        dataset = normalize_months(make_dataset())
        context = RenderContext.for_dataset(dataset, Container(tag="div", element_id="chart"))
        html, script = build_heatmap_html(dataset, context)
        assert html.lstrip().startswith('<div id="chart"')
        assert 'getElementById("chart")' in script

    def test_svg_size(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        assert '<svg class="svg" width="303" height="564">' in html

    def test_axes_and_legend_present(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        assert 'id="x-axis"' in html
        assert 'id="y-axis"' in html
        assert 'id="legend"' in html
        assert ">January</text>" in html
        assert ">December</text>" in html

    def test_only_decade_year_labelled(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        assert ">2000</text>" in html
        assert ">1999</text>" not in html
        assert ">2001</text>" not in html

    def test_cells_with_data_attributes(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        cells = re.findall(r'<rect class="cell"[^>]*>', html)
        assert len(cells) == 36
        assert 'data-year="1999"' in cells[0]
        assert 'data-month="0"' in cells[0]
        assert "data-temp=" in cells[0]
        assert f'fill="{LEGEND_COLORS[0]}"' in cells[0]

    def test_legend_swatches_rendered(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        for color in LEGEND_COLORS:
            assert f"fill: {color}" in html

    def test_single_hidden_tooltip(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        assert html.count('id="tooltip"') == 1
        assert 'class="d3-tip"' in html
        assert "visibility: hidden" in html

    def test_script_carries_tooltip_labels(self, rendered: tuple[str, str]) -> None:
        _, script = rendered
        payload = re.search(r"const labels = (\[.*?\]);\n", script, re.S)
        assert payload is not None
        labels = json.loads(payload.group(1))
        assert len(labels) == 36
        assert labels[0] == [format_temperature(8.66 - 0.9), format_variance(-0.9)]

    def test_script_month_names(self, rendered: tuple[str, str]) -> None:
        _, script = rendered
        months = re.search(r"const MONTHS = (\[.*?\]);\n", script)
        assert months is not None
        assert json.loads(months.group(1)) == [month_name(m) for m in range(12)]

    def test_script_payload_is_compact(self) -> None:
        dataset = normalize_months(make_dataset(1753, 2015))
        with RenderContext.for_dataset(dataset) as context:
            _, script = build_heatmap_html(dataset, context)
        assert "<span" not in script.split("function show")[0]
        # Two short labels per record
        assert len(script) < 40 * len(dataset.monthly_variance)

    def test_script_show_and_hide(self, rendered: tuple[str, str]) -> None:
        _, script = rendered
        show = re.search(r"function show\(cell\) \{(.*?)\n  \}", script, re.S)
        hide = re.search(r"function hide\(\) \{(.*?)\n  \}", script, re.S)
        assert show is not None
        assert hide is not None
        assert 'tip.style.visibility = "visible"' in show.group(1)
        assert "tip.style.opacity = 1" in show.group(1)
        assert "tip.dataset.year = year" in show.group(1)
        assert "- tip.offsetHeight / 2" in show.group(1)
        assert 'tip.style.visibility = "hidden"' in hide.group(1)
        assert "tip.style.opacity = 0" in hide.group(1)

    def test_script_binds_every_cell(self, rendered: tuple[str, str]) -> None:
        _, script = rendered
        assert 'container.querySelectorAll("rect.cell")' in script
        assert 'addEventListener("mouseenter", function () { show(cell); })' in script
        assert 'addEventListener("mouseleave", hide)' in script

    def test_script_tooltip_markup_matches_server_side(self, rendered: tuple[str, str]) -> None:
        _, script = rendered
        for span in ("date", "temperature", "variance"):
            assert f"<span class='{span}'>" in script
            assert f"<span class='{span}'>" in tooltip_html(1999, 0, 7.76, -0.9)

    def test_plot_groups_use_origin(self, rendered: tuple[str, str]) -> None:
        html, _ = rendered
        assert 'id="y-axis" transform="translate(144,16)"' in html
        assert 'id="x-axis" transform="translate(144,436)"' in html
        assert '<g class="map" transform="translate(144,16)">' in html

    def test_scenario_single_record(self) -> None:
        dataset = scenario_dataset()
        with RenderContext.for_dataset(dataset) as context:
            html, script = build_heatmap_html(dataset, context)
        assert 'data-temp="7.29' in html
        assert "7.3 °C" in script
        assert "-1.4 °C" in script

    def test_unnormalized_rejected(self) -> None:
        dataset = make_dataset()
        with pytest.raises(DatasetValidationError, match="normalized"):
            build_heatmap_html(dataset, RenderContext.for_dataset(dataset))
