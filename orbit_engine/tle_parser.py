"""
TLE Parser Module

Decodes and encodes Two-Line Element (TLE) sets, including the Alpha-5 and
Super-5 catalog-number schemes and the high-orbit state-vector variant
(ephemeris type 'H').

Checksum mismatches are not fatal: user-supplied TLEs often carry
approximate or cosmetic checksums, so the record is still decoded and the
mismatch is reported in the :class:`ParseStatus`. Lines that are not
TLE-shaped at all (wrong line markers, characters outside the printable
range, missing or trailing text around the checksum) yield no record.

Line layout of a high-orbit record::

    1 40391U 15007B   15091.99922241 sxxxxxxxx syyyyyyyy szzzzzzzzH  9994
    2 40391                          saaaaaaaa sbbbbbbbb scccccccc     07

x, y, z are meters and vx, vy, vz are 1e-4 m/s, each a signed eight digit
base-36 integer.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Iterator, Optional, Tuple

from orbit_engine.catalog import decode_catalog_number, encode_catalog_number
from orbit_engine.constants import (
    HIGH_EPHEMERIS_TYPE,
    MINUTES_PER_DAY,
    MINUTES_PER_DAY_CUBED,
    MINUTES_PER_DAY_SQUARED,
    RAD2DEG,
    TWOPI,
    VELOCITY_FIELD_SCALE,
)
from orbit_engine.elements import ElementSet, MeanElements, StateVector
from orbit_engine.epoch import decode_epoch, encode_epoch, jd_to_datetime
from orbit_engine.fields import (
    format_angle,
    format_eccentricity,
    format_high_value,
    format_mean_motion,
    format_ndot,
    format_sci,
    get_angle,
    get_eight_places,
    parse_high_value,
    parse_int,
    parse_sci,
)

logger = logging.getLogger(__name__)

TLE_LINE_LENGTH = 69
HIGH_VALUE_OFFSETS = (33, 43, 53)


class ParseStatus(IntEnum):
    """Outcome of decoding a line pair; negative values carry no record."""

    VALID = 0
    LINE1_CHECKSUM = 1
    LINE2_CHECKSUM = 2
    BOTH_CHECKSUMS = 3
    BAD_LINE_MARKER = -1
    INVALID_CHARACTER = -2
    UNTERMINATED_LINE = -3
    INVALID_CATALOG_NUMBER = -5
    INVALID_FIELD = -6


PARSE_STATUS_MESSAGES = {
    ParseStatus.VALID: "No error",
    ParseStatus.LINE1_CHECKSUM: "Line 1 checksum mismatch",
    ParseStatus.LINE2_CHECKSUM: "Line 2 checksum mismatch",
    ParseStatus.BOTH_CHECKSUMS: "Checksum mismatch on both lines",
    ParseStatus.BAD_LINE_MARKER: "Line does not start with the expected '1 ' or '2 ' marker",
    ParseStatus.INVALID_CHARACTER: "Invalid character, or line too short to hold a checksum",
    ParseStatus.UNTERMINATED_LINE: "Text found after the checksum column",
    ParseStatus.INVALID_CATALOG_NUMBER: "Catalog number field is not valid in any scheme",
    ParseStatus.INVALID_FIELD: "A numeric field could not be decoded",
}


class TLEParseError(ValueError):
    """Raised by :class:`TLEParser` when a line pair is not parseable."""

    def __init__(self, status: ParseStatus, message: str = ""):
        self.status = status
        super().__init__(message or PARSE_STATUS_MESSAGES[status])


@dataclass(frozen=True)
class ParseResult:
    elements: Optional[ElementSet]
    status: ParseStatus
    bad_line: Optional[int] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.elements is not None

    @property
    def checksum_ok(self) -> bool:
        return self.status == ParseStatus.VALID


def compute_checksum(line: str) -> int:
    """Checksum digit for columns 1-68: digits count their value, '-' counts 1."""
    total = 0
    for char in line[:68]:
        if "1" <= char <= "9":
            total += ord(char) - ord("0")
        elif char == "-":
            total += 1
    return total % 10


def tle_checksum(line: str) -> int:
    """
    Check one TLE line.

    Args:
        line: A TLE line; a trailing newline is ignored

    Returns:
        0 if the checksum matches, 1..9 for a well-formed line whose
        checksum digit is off by that amount, or a negative value if the
        line is not TLE-shaped: -1 bad line marker, -2 invalid character or
        short line, -3 text after the checksum column.
    """
    line = line.rstrip("\r\n")
    if len(line) < 2 or line[0] not in "12" or line[1] != " ":
        return -1
    if len(line) < TLE_LINE_LENGTH:
        return -2
    for char in line[:68]:
        if char < " " or char > "z":
            return -2
    check = line[68]
    if check not in "0123456789":
        return -2
    if line[TLE_LINE_LENGTH:].strip():
        return -3
    return (compute_checksum(line) - int(check)) % 10


def _decode(line1: str, line2: str, catalog_number: int, name: str) -> ElementSet:
    if line2[2:7] != line1[2:7]:
        logger.warning(
            f"Catalog number fields differ between lines ({line1[2:7]!r} vs {line2[2:7]!r})"
        )
    common = dict(
        catalog_number=catalog_number,
        epoch=decode_epoch(line1[18:20], line1[20:32]),
        classification=line1[7],
        international_designator=line1[9:17],
        ephemeris_type=line1[62],
        bulletin_number=parse_int(line1[64:68]),
        revolution_number=parse_int(line2[63:68]),
        name=name,
    )

    if line1[62] == HIGH_EPHEMERIS_TYPE:
        position = tuple(parse_high_value(line1[i:i + 9]) for i in HIGH_VALUE_OFFSETS)
        velocity = tuple(
            parse_high_value(line2[i:i + 9]) * VELOCITY_FIELD_SCALE for i in HIGH_VALUE_OFFSETS
        )
        return ElementSet(payload=StateVector(position, velocity), **common)

    # Mean motion and its derivatives are given in revolutions and days;
    # they are stored in radians and minutes.
    ndot = parse_int(line1[35:43]) * 1e-8 * TWOPI / MINUTES_PER_DAY_SQUARED
    if line1[33] == "-":
        ndot = -ndot
    mean_elements = MeanElements(
        inclination=get_angle(line2[8:16]),
        raan=get_angle(line2[17:25]),
        eccentricity=parse_int(line2[26:33]) * 1e-7,
        arg_perigee=get_angle(line2[34:42]),
        mean_anomaly=get_angle(line2[43:51]),
        mean_motion=get_eight_places(line2[51:63]) * TWOPI / MINUTES_PER_DAY,
        mean_motion_dot=ndot,
        mean_motion_ddot=parse_sci(line1[44:52]) * TWOPI / MINUTES_PER_DAY_CUBED,
        bstar=parse_sci(line1[53:61]),
    )
    return ElementSet(payload=mean_elements, **common)


def parse_elements(line1: str, line2: str, name: str = "") -> ParseResult:
    """
    Decode a TLE line pair.

    Args:
        line1: First line of TLE
        line2: Second line of TLE
        name: Optional satellite name, carried on the record

    Returns:
        ParseResult with the record and the worst applicable status. A
        negative status means the lines are not parseable and no record
        is returned.
    """
    if not line1.startswith("1") or not line2.startswith("2"):
        bad_line = 1 if not line1.startswith("1") else 2
        return _failure(ParseStatus.BAD_LINE_MARKER, bad_line)

    checksum_problem = 0
    for line_no, line in ((1, line1), (2, line2)):
        check = tle_checksum(line)
        if check < 0:
            return _failure(ParseStatus(check), line_no)
        if check > 0:
            checksum_problem |= line_no

    try:
        catalog_number = decode_catalog_number(line1[2:7])
    except ValueError as e:
        return _failure(ParseStatus.INVALID_CATALOG_NUMBER, 1, str(e))
    try:
        elements = _decode(line1.rstrip("\r\n"), line2.rstrip("\r\n"), catalog_number, name)
    except ValueError as e:
        return _failure(ParseStatus.INVALID_FIELD, None, str(e))

    status = ParseStatus(checksum_problem)
    if status != ParseStatus.VALID:
        logger.warning(
            f"{PARSE_STATUS_MESSAGES[status]} for catalog number {elements.catalog_number}"
        )
    return ParseResult(elements, status, None, PARSE_STATUS_MESSAGES[status])


def _failure(status: ParseStatus, bad_line: Optional[int], detail: str = "") -> ParseResult:
    message = PARSE_STATUS_MESSAGES[status]
    if bad_line:
        message = f"Line {bad_line}: {message}"
    if detail:
        message = f"{message} ({detail})"
    logger.error(f"TLE parsing error: {message}")
    return ParseResult(None, status, bad_line, message)


def elements_to_lines(elements: ElementSet) -> Tuple[str, str]:
    """
    Encode an element set as a TLE line pair with fresh checksums.

    Raises:
        ValueError: If a value does not fit its fixed-width field
    """
    catalog = encode_catalog_number(elements.catalog_number)
    year_field, day_field = encode_epoch(elements.epoch)
    if not 0 <= elements.bulletin_number <= 9999:
        raise ValueError(f"Bulletin number {elements.bulletin_number} does not fit four columns")
    if not 0 <= elements.revolution_number <= 99999:
        raise ValueError(f"Revolution number {elements.revolution_number} does not fit five columns")
    text = elements.classification + elements.international_designator
    if any(not " " <= c <= "z" for c in text):
        raise ValueError(
            f"Designator {elements.international_designator!r} has characters a TLE line cannot carry"
        )

    line1 = f"1 {catalog}{elements.classification} {elements.international_designator} "
    line1 += f"{year_field}{day_field} "
    if elements.is_high_orbit:
        state = elements.state_vector
        line1 += " ".join(format_high_value(x) for x in state.position)
        line2 = f"2 {catalog} " + " " * 25
        line2 += " ".join(format_high_value(v / VELOCITY_FIELD_SCALE) for v in state.velocity)
        line2 += " "
    else:
        mean = elements.mean_elements
        line1 += format_ndot(mean.mean_motion_dot * MINUTES_PER_DAY_SQUARED / TWOPI) + " "
        line1 += format_sci(mean.mean_motion_ddot * MINUTES_PER_DAY_CUBED / TWOPI) + " "
        line1 += format_sci(mean.bstar) + " "
        line2 = f"2 {catalog} "
        line2 += format_angle(mean.inclination, wrap=False) + " "
        line2 += format_angle(mean.raan) + " "
        line2 += format_eccentricity(mean.eccentricity) + " "
        line2 += format_angle(mean.arg_perigee) + " "
        line2 += format_angle(mean.mean_anomaly) + " "
        line2 += format_mean_motion(mean.mean_motion * MINUTES_PER_DAY / TWOPI)
    line1 += f"{elements.ephemeris_type} {elements.bulletin_number:4d}"
    line2 += f"{elements.revolution_number:5d}"

    line1 += str(compute_checksum(line1))
    line2 += str(compute_checksum(line2))
    return line1, line2


def iter_tles(text: str) -> Iterator[Tuple[str, ParseResult]]:
    """
    Scan free text for TLE line pairs.

    Accepts two-line and three-line (named) sets; a name line may carry the
    '0 ' prefix used by three-line element files.

    Yields:
        Tuples of (name, ParseResult), one per line pair found
    """
    lines = [ln.rstrip() for ln in text.splitlines()]
    name = ""
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("1 ") and i + 1 < len(lines) and lines[i + 1].startswith("2 "):
            yield name, parse_elements(line, lines[i + 1], name)
            name = ""
            i += 2
            continue
        if line.strip() and not line.startswith(("1 ", "2 ")):
            name = line[2:].strip() if line.startswith("0 ") else line.strip()
        i += 1


class TLEParser:
    """
    Parser and utilities for Two-Line Element (TLE) sets.

    Provides methods for:
    - Parsing TLE lines into an ElementSet, raising on unparseable input
    - Summarizing a TLE as a dictionary of conventional units
    - Reconstructing TLE lines from an ElementSet
    """

    def parse(self, line1: str, line2: str, name: str = "") -> ElementSet:
        """
        Parse TLE lines, tolerating checksum mismatches.

        Raises:
            TLEParseError: If the lines are not parseable
        """
        result = parse_elements(line1, line2, name)
        if not result.ok:
            raise TLEParseError(result.status, result.message)
        return result.elements

    def parse_tle(self, line1: str, line2: str, name: str = "") -> Dict[str, Any]:
        """
        Parse TLE lines into structured data.

        Args:
            line1: First line of TLE
            line2: Second line of TLE
            name: Optional satellite name

        Returns:
            Dictionary containing parsed TLE data in degrees and rev/day
        """
        result = parse_elements(line1, line2, name)
        if not result.ok:
            raise TLEParseError(result.status, result.message)
        elements = result.elements

        tle_data = {
            "name": name,
            "norad_id": elements.catalog_number,
            "classification": elements.classification,
            "international_designator": elements.international_designator,
            "epoch_jd": elements.epoch,
            "epoch_datetime": elements.epoch_datetime,
            "ephemeris_type": elements.ephemeris_type,
            "element_number": elements.bulletin_number,
            "revolution_number": elements.revolution_number,
            "parse_status": result.status,
        }
        if elements.is_high_orbit:
            state = elements.state_vector
            tle_data["position_m"] = state.position
            tle_data["velocity_ms"] = state.velocity
        else:
            mean = elements.mean_elements
            tle_data.update({
                "inclination_deg": mean.inclination * RAD2DEG,
                "raan_deg": mean.raan * RAD2DEG,
                "eccentricity": mean.eccentricity,
                "arg_perigee_deg": mean.arg_perigee * RAD2DEG,
                "mean_anomaly_deg": mean.mean_anomaly * RAD2DEG,
                "mean_motion_rev_per_day": mean.mean_motion_rev_per_day,
                "bstar_drag": mean.bstar,
            })
        return tle_data

    def tle_data_to_lines(self, elements: ElementSet) -> Tuple[str, str]:
        """Reconstruct TLE lines from an ElementSet."""
        return elements_to_lines(elements)

    def epoch_to_datetime(self, epoch_year: int, epoch_days: float) -> datetime:
        """
        Convert TLE epoch fields to datetime.

        Args:
            epoch_year: Two-digit year
            epoch_days: Day of year with fractional part

        Returns:
            Datetime object in UTC
        """
        return jd_to_datetime(decode_epoch(f"{epoch_year:02d}", f"{epoch_days:012.8f}"))
