"""Fetch the global temperature dataset."""

from __future__ import annotations

import requests
from pydantic import ValidationError

from temperature_heatmap.datasources.global_temperature.client import DATASET_URL
from temperature_heatmap.schemas import Dataset
from temperature_heatmap.services.http import session


class FetchOrParseFailure(Exception):
    """The dataset could not be downloaded or did not parse into a Dataset."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to load dataset from {url}: {reason}")


def fetch_dataset(url: str = DATASET_URL, *, timeout: float | None = None) -> Dataset:
    """
    Download and parse the dataset with a single GET request.

    Args:
        url: Location of the JSON resource.
        timeout: Per-request timeout in seconds (session default if None).

    Returns:
        The parsed, not yet normalized, Dataset.

    Raises:
        FetchOrParseFailure: On network errors, HTTP error statuses,
            malformed JSON, or a body that doesn't match the Dataset shape.
    """
    kwargs: dict[str, float] = {}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        resp = session.get(url, **kwargs)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as exc:
        # requests' JSONDecodeError is a RequestException subclass too
        raise FetchOrParseFailure(url, str(exc)) from exc

    try:
        return Dataset.model_validate(payload)
    except ValidationError as exc:
        reason = f"unexpected dataset shape ({exc.error_count()} errors)"
        raise FetchOrParseFailure(url, reason) from exc
