"""
Catalog Number Codec

The five character catalog-number field has been stretched through four
numbering eras:

==========  ======================  =============================
Scheme      Field shape             Numbers
==========  ======================  =============================
classic     ``ddddd``               0 .. 99999
alpha5      ``Ldddd``               100000 .. 339999
super5a     ``xxxxX``               340000 .. 906309663
super5b     ``xxxXd``               906309664 .. 1047867423
==========  ======================  =============================

``d`` is a digit, ``L`` an uppercase letter other than I and O, ``x`` any of
the 64 symbols ``0-9 A-Z a-z + -`` and ``X`` a non-digit symbol. The
Super-5 schemes are only entered when the trailing characters are
unambiguously non-digit, so an all-digit field always decodes classically.

References:
    Space-Track Alpha-5 documentation, https://www.space-track.org/documentation#tle-alpha5
"""

from orbit_engine.constants import (
    ALPHA5_START,
    MAX_CATALOG_NUMBER,
    SUPER5_START,
    SUPER5B_START,
)

BASE64_SYMBOLS = (
    "0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "+-"
)

# Alpha-5 leading letters; I and O are skipped
ALPHA5_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"

SUPER5A_SPAN = 54 * 64 ** 4
SUPER5B_SPAN = 540 * 64 ** 3


def base64_value(char: str) -> int:
    """Value of one character in the 64-symbol alphabet; blank counts as 0."""
    if char == " ":
        return 0
    value = BASE64_SYMBOLS.find(char) if len(char) == 1 else -1
    if value < 0:
        raise ValueError(f"Invalid catalog number character {char!r}")
    return value


def decode_catalog_number(field: str) -> int:
    """
    Decode a five character catalog-number field.

    Args:
        field: Columns 3-7 of either TLE line

    Returns:
        The catalog number

    Raises:
        ValueError: If the field is not a valid encoding in any scheme
    """
    if len(field) != 5:
        raise ValueError(f"Catalog number field must be 5 characters, got {field!r}")
    digits = [base64_value(char) for char in field]

    if digits[4] > 9:
        return SUPER5_START + (digits[4] - 10) + 54 * (
            digits[3] + (digits[2] << 6) + (digits[1] << 12) + (digits[0] << 18)
        )
    if digits[3] > 9:
        return SUPER5B_START + digits[4] + (digits[3] - 10) * 10 + 540 * (
            digits[2] + (digits[1] << 6) + (digits[0] << 12)
        )

    if any(char not in "0123456789 " for char in field[1:]):
        raise ValueError(f"Invalid catalog number {field!r}")
    lead = field[0]
    if lead in "0123456789 ":
        first = digits[0]
    elif lead in ALPHA5_LETTERS:
        first = 10 + ALPHA5_LETTERS.index(lead)
    else:
        raise ValueError(f"Invalid Alpha-5 leading character {lead!r} in {field!r}")
    return first * 10000 + int(field[1:].replace(" ", "0"))


def catalog_scheme(number: int) -> str:
    """Name of the only scheme able to encode ``number``."""
    if not 0 <= number <= MAX_CATALOG_NUMBER:
        raise ValueError(f"Catalog number {number} is outside 0..{MAX_CATALOG_NUMBER}")
    if number < ALPHA5_START:
        return "classic"
    if number < SUPER5_START:
        return "alpha5"
    if number < SUPER5B_START:
        return "super5a"
    return "super5b"


def encode_catalog_number(number: int) -> str:
    """Encode ``number`` into its five character field."""
    scheme = catalog_scheme(number)
    if scheme == "classic":
        return f"{number:05d}"
    if scheme == "alpha5":
        lead, rest = divmod(number, 10000)
        return ALPHA5_LETTERS[lead - 10] + f"{rest:04d}"

    if scheme == "super5a":
        offset = number - SUPER5_START
        offset, last = divmod(offset, 54)
        chars = [BASE64_SYMBOLS[last + 10]]
        for _ in range(4):
            offset, value = divmod(offset, 64)
            chars.append(BASE64_SYMBOLS[value])
    else:
        offset = number - SUPER5B_START
        offset, last = divmod(offset, 10)
        offset, fourth = divmod(offset, 54)
        chars = [BASE64_SYMBOLS[last], BASE64_SYMBOLS[fourth + 10]]
        for _ in range(3):
            offset, value = divmod(offset, 64)
            chars.append(BASE64_SYMBOLS[value])
    return "".join(reversed(chars))


def synthesize_designator(number: int) -> str:
    """
    Build the eight character international designator of an analyst object.

    Objects without a COSPAR designator get launch number 000 and a piece
    code derived from the catalog number: the three low base-26 digits give
    the piece letters, and what is left gives the two year digits.
    """
    chars = [" "] * 8
    for i in range(7, 4, -1):
        chars[i] = chr(ord("A") + number % 26)
        number //= 26
    chars[2] = chars[3] = chars[4] = "0"
    chars[1] = chr(ord("0") + number % 10)
    chars[0] = chr(ord("0") + number // 10)
    return "".join(chars)
