"""Monthly global land-surface temperature dataset.

A static JSON file with a base temperature and one variance record per
year/month, published in the freeCodeCamp project reference data.

Public API:
  - fetch: fetch_dataset, FetchOrParseFailure
  - normalize: normalize_months
  - client: DATASET_URL
"""

from temperature_heatmap.datasources.global_temperature.client import DATASET_URL
from temperature_heatmap.datasources.global_temperature.fetch import (
    FetchOrParseFailure,
    fetch_dataset,
)
from temperature_heatmap.datasources.global_temperature.normalize import normalize_months

__all__ = [
    "DATASET_URL",
    "FetchOrParseFailure",
    "fetch_dataset",
    "normalize_months",
]
