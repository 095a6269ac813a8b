"""
Physical and Numerical Constants

Single home for the constants shared by the TLE codec, the analytic
propagator and the high-orbit integrator. Values are kept bit-identical to
the published sources so that reference-accuracy tests stay reproducible.

References:
    Meeus, J. (1998). Astronomical Algorithms (2nd ed.), chapters 25 and 47.
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

import math

PI = math.pi
TWOPI = 2.0 * math.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# Time
MINUTES_PER_DAY = 1440.0
MINUTES_PER_DAY_SQUARED = MINUTES_PER_DAY * MINUTES_PER_DAY
MINUTES_PER_DAY_CUBED = MINUTES_PER_DAY * MINUTES_PER_DAY_SQUARED
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_DAY = SECONDS_PER_MINUTE * MINUTES_PER_DAY
METERS_PER_KM = 1000.0

J2000 = 2451545.5  # JD of 2000 Jan 1.0, as used by the epoch decoder
J1900 = J2000 - 36525.0 - 1.0  # 1900 Jan 0.0
JD_J2000_NOON = 2451545.0  # 1.5 Jan 2000, origin of the lunar/solar series
DAYS_PER_CENTURY = 36525.0
SGP4_EPOCH_ORIGIN = 2433281.5  # 1949 Dec 31 00:00 UT, sgp4init epoch origin
Y2K_PIVOT = 57  # two-digit years below this are 20xx

# Gravitational parameters (m^3/s^2)
EARTH_GM = 3.9860044e14
SOLAR_GM = 1.3271243994e20
LUNAR_GM = 4.902798e12

AU_IN_METERS = 1.495978707e11
SOLAR_ECCENTRICITY = 0.016708634

# J2000 mean obliquity of the ecliptic
SIN_OBLIQ_2000 = 0.397777155931913701597179975942380896684
COS_OBLIQ_2000 = 0.917482062069181825744000384639406458043

# TLE field scales
HIGH_EPHEMERIS_TYPE = "H"
VELOCITY_FIELD_SCALE = 1e-4  # high-orbit velocity fields are 10^-4 m/s
HIGH_VALUE_BASE = 36
HIGH_VALUE_DIGITS = 8
HIGH_VALUE_LIMIT = HIGH_VALUE_BASE ** HIGH_VALUE_DIGITS

# Catalog numbering eras
ALPHA5_START = 100000
SUPER5_START = 340000
SUPER5B_START = SUPER5_START + 905969664
MAX_CATALOG_NUMBER = SUPER5B_START + 141557760 - 1

# Analytic model
DEEP_SPACE_PERIOD_MINUTES = 225.0

# RK4 step control (days); changing these breaks backward compatibility
RK4_MAX_STEP_DAYS = 1.0
RK4_VELOCITY_CHANGE_LIMIT = 1e-3
RK4_MIN_STEP_DAYS = 1e-5
