"""
Element Records

An :class:`ElementSet` is the decoded form of one TLE. Its trailing numeric
payload is either a set of mean orbital elements (ordinary records) or a
Cartesian state vector (ephemeris type ``H``); the ephemeris type selects
which, and a record whose payload disagrees with its type cannot be built.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple, Union

from orbit_engine.catalog import catalog_scheme, synthesize_designator
from orbit_engine.constants import HIGH_EPHEMERIS_TYPE, MINUTES_PER_DAY, TWOPI
from orbit_engine.epoch import jd_to_datetime


@dataclass(frozen=True)
class MeanElements:
    """Mean elements in radians and minutes."""

    inclination: float
    raan: float
    eccentricity: float
    arg_perigee: float
    mean_anomaly: float
    mean_motion: float  # rad/min
    mean_motion_dot: float = 0.0  # n-dot / 2, rad/min^2
    mean_motion_ddot: float = 0.0  # n-dot-dot / 6, rad/min^3
    bstar: float = 0.0

    @property
    def mean_motion_rev_per_day(self) -> float:
        return self.mean_motion * MINUTES_PER_DAY / TWOPI

    @property
    def period_minutes(self) -> float:
        return TWOPI / self.mean_motion


@dataclass(frozen=True)
class StateVector:
    """Geocentric equatorial state: position in meters, velocity in m/s."""

    position: Tuple[float, float, float]
    velocity: Tuple[float, float, float]

    def __post_init__(self):
        if len(self.position) != 3 or len(self.velocity) != 3:
            raise ValueError("State vector needs three position and three velocity components")
        object.__setattr__(self, "position", tuple(float(x) for x in self.position))
        object.__setattr__(self, "velocity", tuple(float(x) for x in self.velocity))


Payload = Union[MeanElements, StateVector]


@dataclass(frozen=True)
class ElementSet:
    """
    One decoded element set.

    Attributes:
        catalog_number: Catalog (NORAD) number, 0..1047867423
        epoch: Julian Date of the epoch
        payload: MeanElements, or StateVector when ``ephemeris_type`` is 'H'
        classification: Security classification, almost always 'U'
        international_designator: Eight characters; synthesized from the
            catalog number when left blank
        ephemeris_type: 'H' for high-orbit state vectors, else '0' or ' '
        bulletin_number: Element set number
        revolution_number: Revolution number at epoch
    """

    catalog_number: int
    epoch: float
    payload: Payload
    classification: str = "U"
    international_designator: str = ""
    ephemeris_type: str = "0"
    bulletin_number: int = 0
    revolution_number: int = 0
    name: str = field(default="", compare=False)

    def __post_init__(self):
        catalog_scheme(self.catalog_number)
        if len(self.ephemeris_type) != 1 or len(self.classification) != 1:
            raise ValueError("Ephemeris type and classification are single characters")
        if self.ephemeris_type == HIGH_EPHEMERIS_TYPE:
            if not isinstance(self.payload, StateVector):
                raise ValueError("Ephemeris type 'H' requires a StateVector payload")
        elif not isinstance(self.payload, MeanElements):
            raise ValueError(
                f"Ephemeris type {self.ephemeris_type!r} requires a MeanElements payload"
            )
        designator = self.international_designator
        if not designator[:5].strip():
            designator = synthesize_designator(self.catalog_number)
        object.__setattr__(self, "international_designator", designator.ljust(8)[:8])

    @property
    def is_high_orbit(self) -> bool:
        return self.ephemeris_type == HIGH_EPHEMERIS_TYPE

    @property
    def mean_elements(self) -> MeanElements:
        if not isinstance(self.payload, MeanElements):
            raise TypeError(f"Catalog number {self.catalog_number} carries a state vector")
        return self.payload

    @property
    def state_vector(self) -> StateVector:
        if not isinstance(self.payload, StateVector):
            raise TypeError(f"Catalog number {self.catalog_number} carries mean elements")
        return self.payload

    @property
    def epoch_datetime(self) -> datetime:
        return jd_to_datetime(self.epoch)
