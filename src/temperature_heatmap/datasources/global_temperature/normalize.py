"""Month re-indexing for the global temperature dataset."""

from __future__ import annotations

from temperature_heatmap.datasources.global_temperature.client import MONTHS_PER_YEAR
from temperature_heatmap.schemas import Dataset, DatasetValidationError


def normalize_months(dataset: Dataset) -> Dataset:
    """
    Shift every record's month from 1-12 to 0-11, in place.

    The dataset is flagged as normalized afterwards so a second call is
    rejected rather than shifting the months again.

    Returns:
        The same Dataset, for chaining.

    Raises:
        DatasetValidationError: If the dataset was already normalized or a
            record's month is outside 1-12. No record is modified in either case.
    """
    if dataset.normalized:
        msg = "Dataset months are already zero-indexed"
        raise DatasetValidationError(msg)

    bad = [r for r in dataset.monthly_variance if not 1 <= r.month <= MONTHS_PER_YEAR]
    if bad:
        first = bad[0]
        msg = f"Month out of range 1-{MONTHS_PER_YEAR}: {first.year}/{first.month}"
        raise DatasetValidationError(msg)

    for record in dataset.monthly_variance:
        record.month -= 1
    dataset.mark_normalized()
    return dataset
