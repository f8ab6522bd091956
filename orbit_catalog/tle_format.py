"""
TLE Format Module

Builds Two-Line Element (TLE) sets from decomposed catalog elements and
parses TLE text back into element values.

The layout follows the fixed-column NORAD format read by every SGP4
implementation:

    1 NNNNNC NNNNNAAA YYDDD.DDDDDDDD +.NNNNNNNN +NNNNN-N +NNNNN-N N NNNNK
    2 NNNNN NNN.NNNN NNN.NNNN NNNNNNN NNN.NNNN NNN.NNNN NN.NNNNNNNNNNNNNK

where K is the modulo-10 checksum over columns 1-68.

References:
    Hoots, F. R., & Roehrich, R. L. (1980). Spacetrack Report #3.
    Kelso, T.S. CelesTrak "FAQs: Two-Line Element Set Format".
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Tuple

from sgp4.api import Satrec, WGS72

from orbit_catalog.config import (
    ALPHA5_LETTERS,
    DEFAULT_CLASSIFICATION,
    DEFAULT_ELEMENT_SET_NO,
    DEFAULT_EPHEMERIS_TYPE,
    DEFAULT_INTL_DESIGNATOR,
    DEFAULT_PIECE,
    MAX_ALPHA5_ID,
    SECONDS_PER_DAY,
    TLE_FIRST_EPOCH_YEAR,
)
from orbit_catalog.errors import StructuralError
from orbit_catalog.models import CatalogRecord

TLE_DATA_COLUMNS = 68
ZERO_EXPONENT = " 00000+0"

# sgp4 keeps ndot/nddot in rad/min^2 and rad/min^3
_XPDOTP = 1440.0 / (2.0 * math.pi)


def compute_checksum(line: str) -> int:
    """Modulo-10 checksum: digits count their value, '-' counts 1."""
    checksum = 0
    for char in line[:TLE_DATA_COLUMNS]:
        if "0" <= char <= "9":
            checksum += int(char)
        elif char == "-":
            checksum += 1
    return checksum % 10


def verify_checksum(line: str) -> bool:
    """Check that column 69 holds the checksum of columns 1-68."""
    line = line.rstrip()
    if len(line) <= TLE_DATA_COLUMNS or not line[TLE_DATA_COLUMNS].isdigit():
        return False
    return int(line[TLE_DATA_COLUMNS]) == compute_checksum(line)


def _with_checksum(line: str) -> str:
    line = line.ljust(TLE_DATA_COLUMNS)[:TLE_DATA_COLUMNS]
    return line + str(compute_checksum(line))


def format_catalog_number(norad_id: int) -> str:
    """
    Format a catalog number for columns 3-7.

    Numbers above 99999 use the Alpha-5 scheme, where a letter stands in
    for the leading two digits (A=10 ... Z=33, skipping I and O).
    """
    if norad_id < 0 or norad_id > MAX_ALPHA5_ID:
        raise StructuralError(f"Catalog number {norad_id} does not fit the 5-column field")
    if norad_id <= 99999:
        return f"{norad_id:05d}"
    return ALPHA5_LETTERS[norad_id // 10000 - 10] + f"{norad_id % 10000:04d}"


def format_designator(object_id: str) -> str:
    """
    Build the 8-column international designator from a dash-delimited ID.

    '1998-067A' becomes '98067A  '. IDs with fewer than two dash parts
    fall back to '00000A  '.
    """
    parts = object_id.split("-")
    if len(parts) < 2:
        return DEFAULT_INTL_DESIGNATOR

    launch_year = parts[0][-2:]
    launch_number = parts[1][:3]
    piece = parts[1][3:] or DEFAULT_PIECE
    return (launch_year + launch_number + piece).ljust(8)[:8]


def format_epoch(epoch: datetime) -> str:
    """Two-digit year plus fractional day of year, 14 columns."""
    if epoch.tzinfo is None:
        epoch = epoch.replace(tzinfo=timezone.utc)
    else:
        epoch = epoch.astimezone(timezone.utc)

    if not TLE_FIRST_EPOCH_YEAR <= epoch.year < TLE_FIRST_EPOCH_YEAR + 100:
        raise StructuralError(f"Epoch year {epoch.year} has no two-digit TLE form")

    start_of_year = datetime(epoch.year, 1, 1, tzinfo=timezone.utc)
    day_of_year = 1.0 + (epoch - start_of_year).total_seconds() / SECONDS_PER_DAY
    return f"{epoch.year % 100:02d}{day_of_year:012.8f}"


def format_eccentricity(value: float) -> str:
    """Eccentricity as seven digits with the leading "0." dropped."""
    digits = f"{value:.7f}"
    if value < 0 or not digits.startswith("0."):
        raise StructuralError(f"Eccentricity {value} does not fit the 7-column field")
    return digits[2:]


def format_mean_motion_dot(value: float) -> str:
    """Signed first derivative of mean motion without a leading zero, 10 columns."""
    sign = "-" if value < 0 else " "
    digits = f"{abs(value):.8f}"
    if not digits.startswith("0."):
        raise StructuralError(f"Mean motion derivative {value} does not fit the 10-column field")
    return sign + digits[1:]


def format_exponent(value: float) -> str:
    """
    Format a value in TLE assumed-decimal exponent notation.

    The 8-column field reads as sign, five mantissa digits, exponent sign
    and one exponent digit, meaning +/-0.NNNNN x 10^E. For example
    0.00021844 becomes ' 21844-3'.
    """
    if abs(value) < 1e-10:
        return ZERO_EXPONENT

    sign = "-" if value < 0 else " "
    magnitude = abs(value)

    exponent = math.floor(math.log10(magnitude)) + 1
    mantissa = round(magnitude / 10.0 ** exponent * 100000)

    # Rounding can carry into a sixth digit
    if mantissa >= 100000:
        mantissa //= 10
        exponent += 1

    if abs(exponent) > 9:
        raise StructuralError(f"Value {value} needs a two-digit exponent")

    exp_sign = "-" if exponent < 0 else "+"
    return f"{sign}{mantissa:05d}{exp_sign}{abs(exponent)}"


def encode_tle(record: CatalogRecord) -> Tuple[str, str]:
    """
    Synthesize TLE lines from a record's decomposed elements.

    Args:
        record: Catalog record with epoch and all six mean elements

    Returns:
        Tuple of (line1, line2), 69 characters each

    Raises:
        StructuralError: If the record lacks elements or a value cannot be
            laid out in its column field
    """
    if not record.has_elements:
        raise StructuralError(f"Satellite {record.norad_id} has no element set to encode")

    catalog_number = format_catalog_number(record.norad_id)
    element_set_no = record.element_set_no or DEFAULT_ELEMENT_SET_NO
    ephemeris_type = record.ephemeris_type or DEFAULT_EPHEMERIS_TYPE

    # Format line 1
    line1 = f"1 {catalog_number}{record.classification_type or DEFAULT_CLASSIFICATION} "
    line1 += format_designator(record.object_id) + " "
    line1 += format_epoch(record.epoch) + " "
    line1 += format_mean_motion_dot(record.mean_motion_dot) + " "
    line1 += format_exponent(record.mean_motion_ddot) + " "
    line1 += format_exponent(record.bstar) + " "
    line1 += f"{ephemeris_type} "
    line1 += f"{element_set_no:>4}"
    line1 = _with_checksum(line1)

    # Format line 2
    ecc_str = format_eccentricity(record.eccentricity)
    line2 = f"2 {catalog_number} "
    line2 += f"{record.inclination:8.4f} "
    line2 += f"{record.ra_of_asc_node:8.4f} "
    line2 += ecc_str + " "
    line2 += f"{record.arg_of_pericenter:8.4f} "
    line2 += f"{record.mean_anomaly:8.4f} "
    line2 += f"{record.mean_motion:11.8f}"
    line2 += f"{(record.rev_at_epoch or 0) % 100000:05d}"
    line2 = _with_checksum(line2)

    return line1, line2


def epoch_to_datetime(epoch_year: int, epoch_days: float) -> datetime:
    """
    Convert TLE epoch to datetime.

    Args:
        epoch_year: Two-digit year
        epoch_days: Day of year with fractional part

    Returns:
        Datetime object in UTC
    """
    year = 1900 + epoch_year if epoch_year >= 57 else 2000 + epoch_year
    # -1 because day 1 is Jan 1
    return datetime(year, 1, 1, tzinfo=timezone.utc) + timedelta(days=epoch_days - 1.0)


def parse_tle(line1: str, line2: str, name: str = "") -> Dict[str, Any]:
    """
    Parse TLE lines into element values.

    Keys match the CatalogRecord field names, with angles in degrees and
    mean motion in rev/day.

    Args:
        line1: First line of TLE
        line2: Second line of TLE
        name: Optional satellite name

    Returns:
        Dictionary containing parsed TLE data
    """
    satellite = Satrec.twoline2rv(line1, line2, WGS72)

    return {
        "name": name,
        "norad_id": satellite.satnum,
        "classification_type": satellite.classification,
        "epoch_year": satellite.epochyr,
        "epoch_days": satellite.epochdays,
        "epoch": epoch_to_datetime(satellite.epochyr, satellite.epochdays),
        "mean_motion_dot": satellite.ndot * _XPDOTP * 1440.0,
        "mean_motion_ddot": satellite.nddot * _XPDOTP * 1440.0 * 1440.0,
        "bstar": satellite.bstar,
        "ephemeris_type": satellite.ephtype,
        "element_set_no": satellite.elnum,
        "inclination": math.degrees(satellite.inclo),
        "ra_of_asc_node": math.degrees(satellite.nodeo),
        "eccentricity": satellite.ecco,
        "arg_of_pericenter": math.degrees(satellite.argpo),
        "mean_anomaly": math.degrees(satellite.mo),
        "mean_motion": satellite.no_kozai * _XPDOTP,
        "rev_at_epoch": satellite.revnum,
        "line1": line1,
        "line2": line2,
    }
