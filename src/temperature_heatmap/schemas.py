"""
Domain models for the temperature heat map.

Pydantic models for the global-temperature dataset. Wire names
(``baseTemperature``, ``monthlyVariance``) are accepted on input and exposed
as snake_case attributes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class DatasetValidationError(ValueError):
    """A dataset is not in a state the requested operation can handle."""


class MonthlyRecord(BaseModel):
    """One month's temperature deviation from the dataset base temperature."""

    year: int
    month: int = Field(..., description="1-12 on the wire, 0-11 after normalization")
    variance: float = Field(..., description="Deviation (°C) from the base temperature")

    def temperature(self, base_temperature: float) -> float:
        """Absolute temperature (°C) for this record."""
        return base_temperature + self.variance


class Dataset(BaseModel):
    """Monthly global land-surface temperature variance dataset."""

    model_config = ConfigDict(populate_by_name=True)

    base_temperature: float = Field(..., alias="baseTemperature")
    monthly_variance: list[MonthlyRecord] = Field(
        ..., alias="monthlyVariance", min_length=1
    )
    _normalized: bool = PrivateAttr(default=False)

    @property
    def normalized(self) -> bool:
        """Whether months have been shifted to 0-11. Never read from input."""
        return self._normalized

    def mark_normalized(self) -> None:
        self._normalized = True

    @property
    def first_year(self) -> int:
        return self.monthly_variance[0].year

    @property
    def last_year(self) -> int:
        return self.monthly_variance[-1].year

    @property
    def years(self) -> list[int]:
        """Distinct years in order of first appearance."""
        return list(dict.fromkeys(record.year for record in self.monthly_variance))

    def temperature_range(self) -> tuple[float, float]:
        """Return ``(min_temp, max_temp)`` across all records.

        Raises:
            DatasetValidationError: If the dataset has no records.
        """
        if not self.monthly_variance:
            msg = "Dataset has no monthly records"
            raise DatasetValidationError(msg)
        variances = [record.variance for record in self.monthly_variance]
        return (
            self.base_temperature + min(variances),
            self.base_temperature + max(variances),
        )
