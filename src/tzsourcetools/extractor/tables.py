# Copyright 2024 Brian T. Park
#
# MIT License

"""
Parsers of the two tab-separated tables of the TZ Database:

* 'iso3166.tab' lists the ISO 3166 alpha-2 country codes and their names:

    # ISO 3166 alpha-2 country codes
    #
    #country-
    #code	name of country, territory, area, or subdivision
    AD	Andorra
    AE	United Arab Emirates

* 'zone.tab' lists the zones to offer to a human selecting a timezone by
  country:

    #country-
    #code	coordinates	TZ	comments
    AD	+4230+00131	Europe/Andorra
    AR	-3436-05827	America/Argentina/Buenos_Aires	Buenos Aires (BA, CF)

Every line must be a comment or a well-formed data line. Anything else,
including a blank line, raises MalformedLineError.
"""

import logging
import re
from typing import Dict
from typing import Iterator
from typing import List
from typing import Optional
from typing import Tuple

from tzsourcetools.data_types.errors import DuplicateDefinitionError
from tzsourcetools.data_types.errors import MalformedLineError
from tzsourcetools.data_types.tz_types import CountriesMap
from tzsourcetools.data_types.tz_types import ISO3166_TAB
from tzsourcetools.data_types.tz_types import ZONE_TAB
from tzsourcetools.data_types.tz_types import ZoneTabRow

COMMENT_PATTERN = re.compile(r'#[^\n]*')

COUNTRY_PATTERN = re.compile(r'([A-Z]{2})\t([!-~][ -~]*[!-~])')

# Latitude is +-DDMM or +-DDMMSS, longitude is +-DDDMM or +-DDDMMSS (ISO 6709).
COORDINATES_PATTERN = (
    r'[-+][0-9]{4}(?:[0-9]{2})?[-+][0-9]{5}(?:[0-9]{2})?'
)

ZONE_TAB_PATTERN = re.compile(
    r'([A-Z]{2})'
    r'\t(' + COORDINATES_PATTERN + r')'
    r'\t([!-~]+)'
    r'(?:\t([!-~][ -~]*[!-~]))?'
)

# Used by decode_coordinates() to split the sign and digits of each half.
COORDINATES_PARTS = re.compile(
    r'([-+])([0-9]{2})([0-9]{2})([0-9]{2})?'
    r'([-+])([0-9]{3})([0-9]{2})([0-9]{2})?'
)


def parse_iso3166_tab(
    contents: str,
    file_name: str = ISO3166_TAB,
) -> CountriesMap:
    """Parse the contents of 'iso3166.tab' into {code -> country name}.

    Raises:
        MalformedLineError: line is neither a comment nor 'CC<tab>name'
        DuplicateDefinitionError: country code listed twice
    """
    countries: CountriesMap = {}
    for line_number, line in _data_lines(contents):
        match = COUNTRY_PATTERN.fullmatch(line)
        if not match:
            raise MalformedLineError(file_name, line_number, line)
        code, name = match.group(1), match.group(2)
        if code in countries:
            raise DuplicateDefinitionError(
                name=code,
                file_name=file_name,
                line_number=line_number,
                message=f"duplicate {file_name} entry for {code}",
            )
        countries[code] = name

    logging.info(f"{file_name}: Countries: {len(countries)}")
    return countries


def parse_zone_tab(
    contents: str,
    file_name: str = ZONE_TAB,
) -> List[ZoneTabRow]:
    """Parse the contents of 'zone.tab' into a list of ZoneTabRow, in the
    order of the file. A missing region description becomes ''.

    Raises:
        MalformedLineError: line is neither a comment nor a zone.tab row
        DuplicateDefinitionError: (country code, region) listed twice
    """
    rows: List[ZoneTabRow] = []
    seen: Dict[Tuple[str, str], int] = {}
    for line_number, line in _data_lines(contents):
        match = ZONE_TAB_PATTERN.fullmatch(line)
        if not match:
            raise MalformedLineError(file_name, line_number, line)
        code, coordinates, zone_name, region = match.groups()
        if region is None:
            region = ''

        key = (code, region)
        if key in seen:
            raise DuplicateDefinitionError(
                name=code,
                file_name=file_name,
                line_number=line_number,
                message=(
                    f"duplicate {file_name} entry for {code} "
                    f"(region '{region}') at line {line_number}, "
                    f"previously at line {seen[key]}"
                ),
            )
        seen[key] = line_number

        rows.append(ZoneTabRow(
            country_code=code,
            coordinates=coordinates,
            zone_name=zone_name,
            region=region,
            line_number=line_number,
        ))

    logging.info(f"{file_name}: Rows: {len(rows)}")
    return rows


def decode_coordinates(coordinates: str) -> Tuple[float, float]:
    """Convert an ISO 6709 coordinates string from zone.tab (e.g.
    '+404251-0740023') into (latitude, longitude) in decimal degrees. The
    seconds are optional in each half.
    """
    match = COORDINATES_PARTS.fullmatch(coordinates)
    if not match:
        raise ValueError(f"Invalid coordinates '{coordinates}'")
    (lat_sign, lat_deg, lat_min, lat_sec,
        lon_sign, lon_deg, lon_min, lon_sec) = match.groups()
    latitude = _to_degrees(lat_sign, lat_deg, lat_min, lat_sec)
    longitude = _to_degrees(lon_sign, lon_deg, lon_min, lon_sec)
    return latitude, longitude


def _to_degrees(
    sign: str,
    degrees: str,
    minutes: str,
    seconds: Optional[str],
) -> float:
    value = int(degrees) + int(minutes) / 60
    if seconds:
        value += int(seconds) / 3600
    return -value if sign == '-' else value


def _data_lines(contents: str) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, line) of every line which is not a comment. The
    final newline of the file does not start a new line.
    """
    lines = contents.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    for line_number, line in enumerate(lines, start=1):
        if COMMENT_PATTERN.fullmatch(line):
            continue
        yield line_number, line
