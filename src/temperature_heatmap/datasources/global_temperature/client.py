"""Global temperature dataset location and constants."""

from temperature_heatmap.config import Settings

# Overridable through HEATMAP_DATASET_URL; this is the built-in default.
DATASET_URL: str = Settings.model_fields["dataset_url"].default

# Months per year; the dataset carries one record per (year, month).
MONTHS_PER_YEAR = 12
