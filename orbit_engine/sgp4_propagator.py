"""
Analytic SGP4/SDP4 Propagation

Ordinary element sets are propagated with the SGP4 model (near-earth) or
its SDP4 deep-space extension, chosen by the library when the orbital
period is 225 minutes or longer. The theory itself is delegated to the
proven sgp4 library (Vallado et al. 2006, WGS-72 constants, improved
operation mode) rather than re-derived here.

On top of the library this module adds:
- a named, immutable propagation state built once per element set
- library error codes mapped onto PropagationStatus, so a mean motion
  driven non-positive by drag (library error 2) or a decayed orbit comes
  back as a status with no vectors

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
    Hoots, F. R., & Roehrich, R. L. (1980). Spacetrack Report No. 3.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from sgp4.api import WGS72, Satrec
from sgp4.earth_gravity import wgs72

from orbit_engine.constants import (
    DEEP_SPACE_PERIOD_MINUTES,
    SECONDS_PER_MINUTE,
    SGP4_EPOCH_ORIGIN,
    TWOPI,
)
from orbit_engine.elements import MeanElements
from orbit_engine.results import PropagationResult, PropagationStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticState:
    """
    Precomputed SGP4/SDP4 state for one element set.

    Attributes:
        satrec: Initialized sgp4 satellite record (None if initialization failed)
        epoch: Julian Date of the elements
        mean_motion: Un-Kozai'd mean motion (rad/min)
        semi_major_axis: Mean semi-major axis (earth radii)
        period_minutes: Orbital period from the un-Kozai'd mean motion
        is_deep_space: True when SDP4 corrections apply
        mean_motion_kozai: Mean motion as given in the TLE (rad/min)
        init_status: OK, or the reason no propagation is possible
    """

    satrec: Optional[Satrec]
    epoch: float
    mean_motion: float
    semi_major_axis: float
    period_minutes: float
    is_deep_space: bool
    mean_motion_kozai: float
    init_status: PropagationStatus = PropagationStatus.OK

    @property
    def method(self) -> str:
        return "sdp4" if self.is_deep_space else "sgp4"


def _failed_state(mean: MeanElements, epoch: float, status: PropagationStatus) -> AnalyticState:
    logger.error(f"SGP4 initialization failed: {status.name}")
    return AnalyticState(
        satrec=None,
        epoch=epoch,
        mean_motion=mean.mean_motion,
        semi_major_axis=0.0,
        period_minutes=0.0,
        is_deep_space=False,
        mean_motion_kozai=mean.mean_motion,
        init_status=status,
    )


def init_analytic(mean: MeanElements, epoch: float) -> AnalyticState:
    """
    Initialize SGP4/SDP4 for a set of mean elements.

    Args:
        mean: Mean elements (radians, minutes)
        epoch: Julian Date of the elements

    Returns:
        AnalyticState; check ``init_status`` for elements that cannot be
        propagated at all
    """
    if mean.mean_motion <= 0.0:
        return _failed_state(mean, epoch, PropagationStatus.NEGATIVE_MEAN_MOTION)
    if not 0.0 <= mean.eccentricity < 1.0:
        return _failed_state(mean, epoch, PropagationStatus.ECCENTRICITY_OUT_OF_RANGE)

    satrec = Satrec()
    # The catalog number does not enter the theory; 0 keeps the library's
    # own satnum range checks out of the way of Super-5 numbers.
    satrec.sgp4init(
        WGS72,
        "i",
        0,
        epoch - SGP4_EPOCH_ORIGIN,
        mean.bstar,
        mean.mean_motion_dot,
        mean.mean_motion_ddot,
        mean.eccentricity,
        mean.arg_perigee,
        mean.inclination,
        mean.mean_anomaly,
        mean.mean_motion,
        mean.raan,
    )
    if satrec.error:
        return _failed_state(mean, epoch, PropagationStatus(satrec.error))

    # Un-Kozai'd mean motion from the library's mean semi-major axis
    mean_motion = wgs72.xke / satrec.a ** 1.5
    period = TWOPI / mean_motion
    return AnalyticState(
        satrec=satrec,
        epoch=epoch,
        mean_motion=mean_motion,
        semi_major_axis=satrec.a,
        period_minutes=period,
        is_deep_space=period >= DEEP_SPACE_PERIOD_MINUTES,
        mean_motion_kozai=mean.mean_motion,
    )


def propagate_analytic(state: AnalyticState, tsince: float) -> PropagationResult:
    """
    Propagate with SGP4/SDP4.

    Args:
        state: State from :func:`init_analytic`
        tsince: Time since epoch (minutes)

    Returns:
        PropagationResult with TEME position (km) and velocity (km/min), or
        a failure status and no vectors
    """
    if state.init_status != PropagationStatus.OK:
        return PropagationResult.failure(state.init_status, tsince, state.method)

    error, position, velocity = state.satrec.sgp4_tsince(tsince)
    if error:
        status = PropagationStatus(error)
        logger.warning(f"{state.method.upper()} error {error} at t={tsince:.1f} min: {status.name}")
        return PropagationResult.failure(status, tsince, state.method)

    return PropagationResult(
        status=PropagationStatus.OK,
        tsince=tsince,
        method=state.method,
        position=np.array(position),
        velocity=np.array(velocity) * SECONDS_PER_MINUTE,
    )
