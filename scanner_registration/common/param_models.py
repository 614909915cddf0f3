"""
Pydantic parameter models for scanner registration.

The flat parameter set is what YAML files and CLI overrides provide; it is
validated here once and then split into the grouped dataclasses of
scanner_registration.config.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from scanner_registration import constants


class RegistrationParams(BaseModel):
    """Validated scanner registration parameters."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Matching
    min_overlap: int = Field(
        default=constants.MIN_OVERLAP,
        ge=constants.MIN_OVERLAP_FLOOR,
        description="Distinct beacons a (rotation, displacement) hypothesis must land to be accepted",
    )

    # Input
    sort_beacons: bool = Field(
        default=True,
        description="Order beacons by taxicab distance from the scanner before matching",
    )
    max_abs_coordinate: int = Field(default=constants.MAX_ABS_COORDINATE_DEFAULT, gt=0)

    # Budget
    max_scanners: int = Field(default=constants.MAX_SCANNERS_DEFAULT, gt=0)
    max_beacons_per_scanner: int = Field(default=constants.MAX_BEACONS_PER_SCANNER_DEFAULT, gt=0)

    @model_validator(mode="after")
    def _overlap_fits_budget(self) -> "RegistrationParams":
        if self.min_overlap > self.max_beacons_per_scanner:
            raise ValueError(
                f"min_overlap={self.min_overlap} exceeds "
                f"max_beacons_per_scanner={self.max_beacons_per_scanner}"
            )
        return self
