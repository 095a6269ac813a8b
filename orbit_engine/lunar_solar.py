"""
Low-Precision Lunar and Solar Positions

Geocentric positions of the Moon and Sun, in meters, ecliptic coordinates of
date, from the leading terms of Meeus' series. They only feed the third-body
accelerations of the high-orbit integrator, where this precision is what the
stored state vectors were fitted against.

RK4 evaluates the derivative twice at each step midpoint and shares the end
time of one step with the start of the next, so a one-entry memo removes
most of the trigonometry. The memo belongs to a :class:`LunarSolarEphemeris`
instance; use one instance per propagation timeline.

References:
    Meeus, J. (1998). Astronomical Algorithms (2nd ed.), (25.2)-(25.5),
    (47.1)-(47.5) and table 47.A.
"""

import math
from typing import NamedTuple, Optional

import numpy as np

from orbit_engine.constants import (
    AU_IN_METERS,
    DAYS_PER_CENTURY,
    DEG2RAD,
    JD_J2000_NOON,
    SOLAR_ECCENTRICITY,
)


class BodyPositions(NamedTuple):
    """Lunar and solar position vectors (m) with their distances (m)."""

    lunar: np.ndarray
    lunar_distance: float
    solar: np.ndarray
    solar_distance: float


def _frozen(values) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


def raw_lunar_solar_position(jd: float) -> BodyPositions:
    """Compute lunar and solar positions at ``jd`` without any caching."""
    t_cen = (jd - JD_J2000_NOON) / DAYS_PER_CENTURY

    # Mean lunar longitude (47.1)
    l_prime = 218.3164477 * DEG2RAD + (481267.88123421 * DEG2RAD) * t_cen
    # Lunar mean anomaly (47.4)
    m_prime = 134.9633964 * DEG2RAD + (477198.8675055 * DEG2RAD) * t_cen
    # Solar mean longitude (25.2)
    l_solar = 280.46646 * DEG2RAD + (36000.76983 * DEG2RAD) * t_cen
    # Solar mean anomaly (47.3)
    m_solar = 357.5291092 * DEG2RAD + (35999.0502909 * DEG2RAD) * t_cen
    # Lunar mean argument of latitude (47.5)
    f = 93.2720950 * DEG2RAD + (483202.0175233 * DEG2RAD) * t_cen
    lunar_mean_elong = 297.8501921 * DEG2RAD + (445267.1114034 * DEG2RAD) * t_cen
    term2 = 2.0 * lunar_mean_elong - m_prime

    lunar_lon = (
        l_prime
        + (6.288774 * DEG2RAD) * math.sin(m_prime)
        + (1.274027 * DEG2RAD) * math.sin(term2)
        + (0.658314 * DEG2RAD) * math.sin(2.0 * lunar_mean_elong)
        + (0.213618 * DEG2RAD) * math.sin(2.0 * m_prime)
        - (0.185166 * DEG2RAD) * math.sin(m_solar)
        - (0.114332 * DEG2RAD) * math.sin(2.0 * f)
    )
    lunar_lat = (
        (5.128122 * DEG2RAD) * math.sin(f)
        + (0.280602 * DEG2RAD) * math.sin(m_prime + f)
        + (0.277693 * DEG2RAD) * math.sin(m_prime - f)
        + (0.173237 * DEG2RAD) * math.sin(2.0 * lunar_mean_elong - f)
    )
    lunar_r = (
        385000560.0
        - 20905355.0 * math.cos(m_prime)
        - 3699111.0 * math.cos(term2)
        - 2955968.0 * math.cos(2.0 * lunar_mean_elong)
        - 569925.0 * math.cos(2.0 * m_solar)
    )

    # Sun: equation of center to first order (above 25.5)
    solar_lon = l_solar + (1.914602 * DEG2RAD) * math.sin(m_solar)
    solar_r = AU_IN_METERS * (1.0 - SOLAR_ECCENTRICITY * math.cos(m_solar))

    projected = lunar_r * math.cos(lunar_lat)
    lunar = _frozen([
        projected * math.cos(lunar_lon),
        projected * math.sin(lunar_lon),
        lunar_r * math.sin(lunar_lat),
    ])
    solar = _frozen([solar_r * math.cos(solar_lon), solar_r * math.sin(solar_lon), 0.0])
    return BodyPositions(lunar, lunar_r, solar, solar_r)


class LunarSolarEphemeris:
    """
    Lunar/solar positions with a single-entry memo keyed on the Julian Date.

    The memo only ever answers for the exact JD it was filled with; any other
    JD recomputes and replaces it. Instances are not thread-safe: give each
    concurrent propagation its own.
    """

    def __init__(self):
        self._jd: Optional[float] = None
        self._positions: Optional[BodyPositions] = None
        self.hits = 0
        self.misses = 0

    def position(self, jd: float) -> BodyPositions:
        if self._positions is None or jd != self._jd:
            self._positions = raw_lunar_solar_position(jd)
            self._jd = jd
            self.misses += 1
        else:
            self.hits += 1
        return self._positions

    def clear(self) -> None:
        """Drop the memo."""
        self._jd = None
        self._positions = None
