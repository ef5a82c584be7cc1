"""
Prefect flow for building the heat map page.

Fetches the dataset once, normalizes it, renders the heat map, and writes
``index.html`` into the site directory. A fetch or parse failure is logged
and nothing is written.

Run locally:
    python -m temperature_heatmap.flows.build
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from prefect import flow, task

from temperature_heatmap.config import get_settings
from temperature_heatmap.datasources.global_temperature import (
    DATASET_URL,
    FetchOrParseFailure,
    fetch_dataset,
    normalize_months,
)
from temperature_heatmap.renderers import render_template
from temperature_heatmap.renderers.heatmap import (
    TITLE,
    Container,
    RenderContext,
    build_heatmap_html,
)
from temperature_heatmap.schemas import Dataset

logger = logging.getLogger(__name__)


@task(name="fetch-dataset")
def load_dataset(url: str = DATASET_URL, timeout: float | None = None) -> Dataset:
    """Fetch the dataset with a single request; no retries."""
    return fetch_dataset(url, timeout=timeout)


@task(name="normalize-dataset")
def normalize_dataset(dataset: Dataset) -> Dataset:
    """Shift months to zero-based indices."""
    return normalize_months(dataset)


@task(name="render-heatmap")
def build_html(
    dataset: Dataset,
    container: Container | None = None,
    source_url: str = DATASET_URL,
) -> str:
    """Render the full heat map page."""
    with RenderContext.for_dataset(dataset, container) as context:
        heatmap_html, heatmap_script = build_heatmap_html(dataset, context)

    return render_template(
        "base.html.j2",
        title=TITLE,
        heatmap_html=heatmap_html,
        heatmap_script=heatmap_script,
        source_url=source_url,
        updated=datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC"),
    )


@task(name="write-site")
def write_site(html: str, site_dir: Path | None = None) -> Path:
    """Write HTML to the site directory (``site_dir`` setting by default)."""
    site_dir = site_dir or get_settings().site_dir
    site_dir.mkdir(parents=True, exist_ok=True)
    output_path = site_dir / "index.html"
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path


@flow(name="build-heatmap", log_prints=True)
def build_all(
    url: str | None = None,
    site_dir: Path | None = None,
    timeout: float | None = None,
) -> dict[str, Any]:
    """
    Build the heat map page from the remote dataset.

    This is the main Prefect flow. Returns a summary dict; on a fetch or
    parse failure the summary carries an ``error`` key and no file is written.
    Unset arguments fall back to the ``dataset_url`` and ``site_dir``
    settings; an unset timeout leaves the shared session default in place.
    """
    settings = get_settings()
    url = url or settings.dataset_url
    site_dir = site_dir or settings.site_dir

    print(f"Fetching dataset from {url}...")
    try:
        dataset = load_dataset(url, timeout)
    except FetchOrParseFailure as exc:
        logger.error("Dataset unavailable, nothing rendered: %s", exc)
        return {"error": str(exc)}

    print(f"Normalizing {len(dataset.monthly_variance)} monthly records...")
    dataset = normalize_dataset(dataset)

    print("Building HTML...")
    html = build_html(dataset, source_url=url)

    print("Writing site...")
    output_path = write_site(html, site_dir)

    print(f"Site built: {output_path}")
    return {"records": len(dataset.monthly_variance), "output": str(output_path)}


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
