"""
TLE Field Codecs

Stateless helpers for the fixed-width fields of a two-line element set:
plain integers, fixed-point angles, the "eight places" day/mean-motion
fields, the packed scientific notation used by the n-dot-dot and B* fields,
and the signed base-36 fields of high-orbit (ephemeris type H) records.

Each decoder has a matching formatter so that the codec can write exactly
what it reads.
"""

import math

from orbit_engine.constants import HIGH_VALUE_DIGITS, HIGH_VALUE_LIMIT, PI, RAD2DEG

BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Fixed-point angles are stored as DDD.DDDD
ANGLE_SCALE = PI / 180e4


def parse_int(field: str, default: int = 0) -> int:
    """Parse a right- or left-padded integer field; blank gives ``default``."""
    text = field.strip()
    if not text:
        return default
    return int(text)


def get_angle(field: str) -> float:
    """
    Decode a DDD.DDDD angle field to radians.

    The value is taken as an integer count of 1e-4 degrees before the
    conversion, so well-formed fields decode bit-identically to the
    classic integer parse.
    """
    text = field.strip()
    if not text:
        return 0.0
    return round(float(text) * 1e4) * ANGLE_SCALE


def get_eight_places(field: str) -> float:
    """
    Decode a field of the form ``III.FFFFFFFF`` (day of year, mean motion).

    The integer part and the eight fractional digits are parsed separately
    and combined as ``int + frac * 1e-8``.
    """
    whole, _, frac = field.partition(".")
    value = float(parse_int(whole))
    frac = frac.strip()
    if frac:
        value += int(frac[:8].ljust(8, "0")) * 1e-8
    return value


def parse_sci(field: str) -> float:
    """
    Convert the packed scientific notation of the n-dot-dot and B* fields.

    The field is ``sdddddSe``: ``s`` blank, ``+`` or ``-``; a five digit
    mantissa with an implied leading decimal point; ``S`` the exponent sign
    and ``e`` a single exponent digit.
    """
    if len(field) < 8 or field[1] == " ":
        return 0.0
    mantissa = int(field[:6])
    if not mantissa:
        return 0.0
    value = mantissa * 1e-5
    exponent = int(field[7])
    if exponent:
        factor = 0.1 if field[6] == "-" else 10.0
        for _ in range(exponent):
            value *= factor
    return value


def format_sci(value: float) -> str:
    """Format ``value`` in the eight character packed scientific notation."""
    if value == 0.0:
        return " 00000-0"
    magnitude = abs(value)
    exponent = int(math.floor(math.log10(magnitude))) + 1
    mantissa = int(round(magnitude / 10.0 ** exponent * 1e5))
    if mantissa >= 100000:
        mantissa = int(round(mantissa / 10.0))
        exponent += 1
    elif mantissa < 10000:
        mantissa *= 10
        exponent -= 1
    if exponent < -9:
        return " 00000-0"
    if exponent > 9:
        raise ValueError(f"Value {value!r} is too large for a packed exponent field")
    sign = "-" if value < 0 else " "
    exp_sign = "-" if exponent < 0 else "+"
    return f"{sign}{mantissa:05d}{exp_sign}{abs(exponent):d}"


def parse_high_value(field: str) -> float:
    """
    Decode a signed base-36 eight digit field (``sxxxxxxxx``).

    Digits are 0-9 then A-Z; the leading character must be ``+`` or ``-``.
    """
    if len(field) < HIGH_VALUE_DIGITS + 1 or field[0] not in "+-":
        raise ValueError(f"Malformed high-orbit field {field!r}")
    value = 0
    for char in field[1:HIGH_VALUE_DIGITS + 1]:
        digit = BASE36_DIGITS.find(char)
        if digit < 0:
            raise ValueError(f"Invalid base-36 digit {char!r} in {field!r}")
        value = value * 36 + digit
    if field[0] == "-":
        value = -value
    return float(value)


def format_high_value(value: float) -> str:
    """Encode ``value`` (rounded to an integer) as a signed base-36 field."""
    number = int(round(value))
    if abs(number) >= HIGH_VALUE_LIMIT:
        raise ValueError(f"Value {value!r} overflows an eight digit base-36 field")
    sign = "-" if number < 0 else "+"
    number = abs(number)
    digits = []
    for _ in range(HIGH_VALUE_DIGITS):
        number, digit = divmod(number, 36)
        digits.append(BASE36_DIGITS[digit])
    return sign + "".join(reversed(digits))


def format_angle(radians: float, wrap: bool = True) -> str:
    """Format an angle as the eight character DDD.DDDD field."""
    degrees = radians * RAD2DEG
    if wrap:
        degrees %= 360.0
    text = f"{degrees:8.4f}"
    if len(text) != 8:
        raise ValueError(f"Angle {degrees!r} deg does not fit an eight character field")
    return text


def format_eccentricity(eccentricity: float) -> str:
    """Seven digits with an implied leading decimal point."""
    digits = int(round(eccentricity * 1e7))
    if not 0 <= digits < 10000000:
        raise ValueError(f"Eccentricity {eccentricity!r} is outside [0, 1)")
    return f"{digits:07d}"


def format_ndot(rev_per_day2: float) -> str:
    """Format the first derivative field (``s.dddddddd``, rev/day^2)."""
    digits = int(round(abs(rev_per_day2) * 1e8))
    if digits >= 100000000:
        raise ValueError(f"Mean motion derivative {rev_per_day2!r} does not fit its field")
    sign = "-" if rev_per_day2 < 0 else " "
    return f"{sign}.{digits:08d}"


def format_mean_motion(rev_per_day: float) -> str:
    """Format mean motion as the eleven character ``dd.dddddddd`` field."""
    text = f"{rev_per_day:11.8f}"
    if len(text) != 11 or rev_per_day < 0:
        raise ValueError(f"Mean motion {rev_per_day!r} rev/day does not fit its field")
    return text
