"""
Propagation status codes and results.

Numeric degeneracy is reported through a status code on the result rather
than an exception or a NaN-filled vector.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np

from orbit_engine.constants import SECONDS_PER_MINUTE


class PropagationStatus(IntEnum):
    OK = 0
    ECCENTRICITY_OUT_OF_RANGE = 1
    NEGATIVE_MEAN_MOTION = 2
    PERTURBED_ECCENTRICITY_OUT_OF_RANGE = 3
    NEGATIVE_SEMI_LATUS_RECTUM = 4
    SUBORBITAL_EPOCH_ELEMENTS = 5
    DECAYED = 6


PROPAGATION_ERROR_MESSAGES = {
    PropagationStatus.OK: "No error",
    PropagationStatus.ECCENTRICITY_OUT_OF_RANGE: "Mean eccentricity < 0.0 or > 1.0",
    PropagationStatus.NEGATIVE_MEAN_MOTION: "Mean motion is not positive after the secular update",
    PropagationStatus.PERTURBED_ECCENTRICITY_OUT_OF_RANGE: "Perturbed eccentricity < 0.0 or > 1.0",
    PropagationStatus.NEGATIVE_SEMI_LATUS_RECTUM: "Semi-latus rectum < 0.0",
    PropagationStatus.SUBORBITAL_EPOCH_ELEMENTS: "Epoch elements are sub-orbital",
    PropagationStatus.DECAYED: "Satellite has decayed",
}


@dataclass(frozen=True)
class PropagationResult:
    """
    Outcome of one propagation.

    ``position`` is in km and ``velocity`` in km/min; both are None unless
    ``status`` is OK.
    """

    status: PropagationStatus
    tsince: float
    method: str
    position: Optional[np.ndarray] = None
    velocity: Optional[np.ndarray] = None

    @property
    def ok(self) -> bool:
        return self.status == PropagationStatus.OK

    @property
    def message(self) -> str:
        return PROPAGATION_ERROR_MESSAGES[self.status]

    @property
    def velocity_kms(self) -> Optional[np.ndarray]:
        if self.velocity is None:
            return None
        return self.velocity / SECONDS_PER_MINUTE

    @classmethod
    def failure(cls, status: PropagationStatus, tsince: float, method: str) -> "PropagationResult":
        return cls(status=status, tsince=tsince, method=method)
