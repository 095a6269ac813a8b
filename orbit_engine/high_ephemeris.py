"""
High-Orbit Numerical Propagation

SGP4/SDP4 fail badly for very high, very eccentric and hyperbolic orbits.
Element sets of ephemeris type 'H' therefore carry a state vector, which is
integrated here with the classic fourth-order Runge-Kutta method under a
deliberately simple force model: the Earth, Moon and Sun as point masses,
with low-precision lunar and solar positions.

The stored state vectors were fitted against exactly this model, so it must
not be "improved": a better force model gives worse results for existing
element sets, just as numerically integrating ordinary TLEs does.

Units: the integration runs in meters, m/s and days, in ecliptic
coordinates of date. Callers get km and km/min, equatorial.

References:
    Meeus, J. (1998). Astronomical Algorithms (2nd ed.).
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from orbit_engine.constants import (
    COS_OBLIQ_2000,
    EARTH_GM,
    LUNAR_GM,
    METERS_PER_KM,
    MINUTES_PER_DAY,
    RK4_MAX_STEP_DAYS,
    RK4_MIN_STEP_DAYS,
    RK4_VELOCITY_CHANGE_LIMIT,
    SECONDS_PER_DAY,
    SECONDS_PER_MINUTE,
    SIN_OBLIQ_2000,
    SOLAR_GM,
)
from orbit_engine.elements import ElementSet
from orbit_engine.lunar_solar import LunarSolarEphemeris

logger = logging.getLogger(__name__)


def equatorial_to_ecliptic(vect: Sequence[float]) -> np.ndarray:
    """Rotate a vector about x by the J2000 obliquity."""
    x, y, z = vect
    return np.array([
        x,
        y * COS_OBLIQ_2000 + z * SIN_OBLIQ_2000,
        z * COS_OBLIQ_2000 - y * SIN_OBLIQ_2000,
    ])


def ecliptic_to_equatorial(vect: Sequence[float]) -> np.ndarray:
    """Inverse of :func:`equatorial_to_ecliptic`."""
    x, y, z = vect
    return np.array([
        x,
        y * COS_OBLIQ_2000 - z * SIN_OBLIQ_2000,
        z * COS_OBLIQ_2000 + y * SIN_OBLIQ_2000,
    ])


def acceleration(jd: float, pos: np.ndarray, ephemeris: LunarSolarEphemeris) -> np.ndarray:
    """
    Acceleration (m/s^2) at geocentric position ``pos`` (m).

    Earth point mass plus the third-body terms of the Sun and the Moon:
    ``GM * ((s - r) / |s - r|^3 - s / |s|^3)``.
    """
    r = np.linalg.norm(pos)
    accel = (-EARTH_GM / (r * r * r)) * pos
    bodies = ephemeris.position(jd)
    for body, distance, gm in (
        (bodies.solar, bodies.solar_distance, SOLAR_GM),
        (bodies.lunar, bodies.lunar_distance, LUNAR_GM),
    ):
        delta = body - pos
        d = np.linalg.norm(delta)
        accel -= (gm / (distance * distance * distance)) * body - (gm / (d * d * d)) * delta
    return accel


def state_derivative(jd: float, state: np.ndarray, ephemeris: LunarSolarEphemeris) -> np.ndarray:
    return np.concatenate((state[3:], acceleration(jd, state[:3], ephemeris)))


def choose_step(deriv: np.ndarray, remaining: float) -> float:
    """
    Pick the next step in days.

    The step is capped at one day and at the span over which any velocity
    component would change by 1e-3 (day units), floored at 1e-5 day, and
    clamped so that it never passes the end of the remaining span.
    """
    max_step = RK4_MAX_STEP_DAYS
    for accel in deriv[3:]:
        if accel and RK4_VELOCITY_CHANGE_LIMIT / abs(accel) < max_step:
            max_step = RK4_VELOCITY_CHANGE_LIMIT / abs(accel)
    if max_step < RK4_MIN_STEP_DAYS:
        max_step = RK4_MIN_STEP_DAYS
    if remaining > max_step:
        return max_step
    if remaining < -max_step:
        return -max_step
    return remaining


@dataclass(frozen=True)
class IntegrationResult:
    state: np.ndarray
    jd: float
    steps: int


def rk4_integrate(
    state: Sequence[float], jd: float, days: float, ephemeris: LunarSolarEphemeris
) -> IntegrationResult:
    """
    Integrate an ecliptic state vector (m, m/s) from ``jd`` over ``days``.

    ``days`` may be negative. Every step shrinks the remaining span, and the
    final step lands on it exactly, so the loop always terminates.

    Raises:
        ValueError: If ``days`` is not finite
    """
    if not math.isfinite(days):
        raise ValueError(f"Cannot integrate over a non-finite span ({days!r} days)")
    state = np.array(state, dtype=float)
    remaining = days
    steps = 0

    while remaining:
        k0 = state_derivative(jd, state, ephemeris)
        dt = choose_step(k0, remaining)
        if remaining - dt == remaining:
            # step below the resolution of the remaining span
            dt = remaining
        h = dt * SECONDS_PER_DAY
        k1 = state_derivative(jd + dt / 2.0, state + (h * 0.5) * k0, ephemeris)
        k2 = state_derivative(jd + dt / 2.0, state + (h * 0.5) * k1, ephemeris)
        k3 = state_derivative(jd + dt, state + h * k2, ephemeris)
        state = state + (h / 6.0) * (k0 + 2.0 * (k1 + k2) + k3)
        jd += dt
        remaining -= dt
        steps += 1

    logger.debug(f"RK4 covered {days:.6f} days in {steps} steps")
    return IntegrationResult(state=state, jd=jd, steps=steps)


@dataclass(frozen=True)
class HighOrbitState:
    """Epoch state rotated into the ecliptic integration frame."""

    epoch: float
    state: np.ndarray


def init_high_orbit(elements: ElementSet) -> HighOrbitState:
    """Build the integration state of an ephemeris type 'H' element set."""
    vector = elements.state_vector
    state = np.concatenate((
        equatorial_to_ecliptic(vector.position),
        equatorial_to_ecliptic(vector.velocity),
    ))
    state.setflags(write=False)
    return HighOrbitState(epoch=elements.epoch, state=state)


def propagate_high_orbit(
    high_state: HighOrbitState, tsince: float, ephemeris: LunarSolarEphemeris
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Propagate a high-orbit state ``tsince`` minutes from its epoch.

    Returns:
        Tuple of (position, velocity), equatorial, in km and km/min
    """
    result = rk4_integrate(high_state.state, high_state.epoch, tsince / MINUTES_PER_DAY, ephemeris)
    pos = ecliptic_to_equatorial(result.state[:3]) / METERS_PER_KM
    vel = ecliptic_to_equatorial(result.state[3:]) * (SECONDS_PER_MINUTE / METERS_PER_KM)
    return pos, vel
