"""
Propagation Facade

Dispatches an element set to the right propagator:

- ordinary element sets go to SGP4/SDP4 (:mod:`orbit_engine.sgp4_propagator`)
  and come back in TEME, km and km/min
- ephemeris type 'H' element sets go to the RK4 integrator
  (:mod:`orbit_engine.high_ephemeris`) and come back equatorial, km and
  km/min

Propagation states are built once per element set and never modified, so
propagating the same state at several times gives the same answers in any
order. The only mutable object involved is the lunar/solar memo used by
the RK4 path; :class:`SatellitePropagator` owns one per timeline.
"""

import logging
from datetime import datetime
from typing import Optional, Union

from orbit_engine.constants import MINUTES_PER_DAY
from orbit_engine.elements import ElementSet
from orbit_engine.epoch import datetime_to_jd
from orbit_engine.high_ephemeris import HighOrbitState, init_high_orbit, propagate_high_orbit
from orbit_engine.lunar_solar import LunarSolarEphemeris
from orbit_engine.results import PropagationResult, PropagationStatus
from orbit_engine.sgp4_propagator import AnalyticState, init_analytic, propagate_analytic
from orbit_engine.tle_parser import TLEParser

logger = logging.getLogger(__name__)

PropagationState = Union[AnalyticState, HighOrbitState]


def init_propagation(elements: ElementSet) -> PropagationState:
    """Precompute the propagation state of an element set."""
    if elements.is_high_orbit:
        return init_high_orbit(elements)
    return init_analytic(elements.mean_elements, elements.epoch)


def propagate(
    elements: ElementSet,
    state: PropagationState,
    tsince: float,
    ephemeris: Optional[LunarSolarEphemeris] = None,
) -> PropagationResult:
    """
    Propagate an element set ``tsince`` minutes from its epoch.

    Args:
        elements: The element set ``state`` was built from
        state: Result of :func:`init_propagation`
        tsince: Time since epoch (minutes), may be negative
        ephemeris: Lunar/solar memo for the RK4 path; a fresh one is used
            when omitted

    Returns:
        PropagationResult with position (km) and velocity (km/min)
    """
    if elements.is_high_orbit:
        if not isinstance(state, HighOrbitState):
            raise TypeError("High-orbit element sets need a HighOrbitState")
        if ephemeris is None:
            ephemeris = LunarSolarEphemeris()
        position, velocity = propagate_high_orbit(state, tsince, ephemeris)
        return PropagationResult(
            status=PropagationStatus.OK,
            tsince=tsince,
            method="rk4",
            position=position,
            velocity=velocity,
        )

    if not isinstance(state, AnalyticState):
        raise TypeError("Ordinary element sets need an AnalyticState")
    return propagate_analytic(state, tsince)


class SatellitePropagator:
    """
    Propagates one element set along one timeline.

    Holds the element set, its precomputed state and its own lunar/solar
    memo. Not thread-safe; use one instance per thread.
    """

    def __init__(self, elements: ElementSet, ephemeris: Optional[LunarSolarEphemeris] = None):
        self.elements = elements
        self.state = init_propagation(elements)
        self.ephemeris = ephemeris if ephemeris is not None else LunarSolarEphemeris()
        self.last_result: Optional[PropagationResult] = None

    @classmethod
    def from_tle(cls, line1: str, line2: str, name: str = "") -> "SatellitePropagator":
        """
        Build a propagator straight from TLE lines.

        Raises:
            TLEParseError: If the lines are not parseable
        """
        return cls(TLEParser().parse(line1, line2, name))

    @property
    def method(self) -> str:
        if isinstance(self.state, HighOrbitState):
            return "rk4"
        return self.state.method

    def propagate(self, tsince: float) -> PropagationResult:
        """Propagate ``tsince`` minutes from epoch."""
        result = propagate(self.elements, self.state, tsince, self.ephemeris)
        if not result.ok:
            logger.error(
                f"Propagation failed for catalog number {self.elements.catalog_number} "
                f"at t={tsince:.1f} min: {result.message}"
            )
        self.last_result = result
        return result

    def propagate_jd(self, jd: float) -> PropagationResult:
        """Propagate to a Julian Date."""
        return self.propagate((jd - self.elements.epoch) * MINUTES_PER_DAY)

    def propagate_datetime(self, dt: datetime) -> PropagationResult:
        """Propagate to a datetime (naive datetimes are UTC)."""
        return self.propagate_jd(datetime_to_jd(dt))
