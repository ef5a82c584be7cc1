"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: pydantic models and dataclasses (Dataset, scales, RenderContext)
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py which orchestrates the rendering pipeline.

Public API:
  - heatmap: build_heatmap_html, RenderContext, Container, Layout
  - tooltip: TooltipState, tooltip_html
  - formatting: month_name, format_temperature, format_variance

Adding a renderer (UI module)
-----------------------------
1. Create ``renderers/{name}.py`` with a build function that returns
   ``render_template("{name}.html.j2", ...)``.

2. Create a Jinja2 template in ``templates/{name}.html.j2``.
   Templates produce HTML fragments (no <html>/<body> tags).
   CSS goes in ``templates/base.html.j2`` within the <style> block.

3. Wire into ``flows/build.py`` and add the placeholder in ``base.html.j2``.

4. Add tests: call your build function with sample data and assert
   the returned HTML contains expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def px(value: float) -> str:
    """SVG coordinate: at most two decimals, no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


_jinja_env.filters["px"] = px


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
