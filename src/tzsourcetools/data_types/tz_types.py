# Copyright 2024 Brian T. Park
#
# MIT License

import re
from collections import OrderedDict
from typing import Dict
from typing import FrozenSet
from typing import List
from typing import Mapping
from typing import NamedTuple
from typing import Optional
from typing_extensions import TypedDict

from tzsourcetools.data_types.errors import InvalidVersionError

"""
Data types created or consumed by the various classes of the tzsourcetools
package. These allow type checking to be performed using mypy. Also contains
global constants used by multiple packages.
"""

# -----------------------------------------------------------------------------
# Constants used by various modules.
# -----------------------------------------------------------------------------

# The continental data files containing the Zone and Link records, used when
# the list cannot be obtained from the TDATA variable of the Makefile.
ZONE_FILES: List[str] = [
    'africa',
    'antarctica',
    'asia',
    'australasia',
    'backward',
    'etcetera',
    'europe',
    'northamerica',
    'southamerica',
]

# Table of ISO 3166 alpha-2 country codes and their names.
ISO3166_TAB: str = 'iso3166.tab'

# Table of country code, coordinates, zone name, and region comments.
ZONE_TAB: str = 'zone.tab'

# TZDB versions look like '2024a'.
VERSION_PATTERN = re.compile(r'[0-9]{4}[a-z]')


# -----------------------------------------------------------------------------
# Data types produced by the extractor package.
# -----------------------------------------------------------------------------

class RawRecord(NamedTuple):
    """A 'Zone' or 'Link' declaration found in a TZDB data file. The entries
    look like this:

    # Zone  NAME                STDOFF      RULES   FORMAT  [UNTIL]
    Zone    America/Chicago     -5:50:36    -       LMT     1883 Nov 18 12:09:24

    # Link  TARGET              LINK-NAME
    Link    America/Chicago     US/Central
    """
    kind: str  # 'Zone' or 'Link'
    name: str  # zone name, or the alias name of a link
    target: Optional[str]  # target of a link, None for a zone
    file_name: str  # data file containing the record
    line_number: int  # 1-based line number in file_name


class ZoneTabRow(NamedTuple):
    """A data line of 'zone.tab':

    # codes coordinates     TZ                  comments
    US      +404251-0740023 America/New_York    Eastern (most areas)
    """
    country_code: str  # ISO 3166 alpha-2 code
    coordinates: str  # ISO 6709 string, e.g. '+404251-0740023'
    zone_name: str  # zone or link name
    region: str  # region description, '' if absent
    line_number: int  # 1-based line number in zone.tab


# Immutable set of zone or link names.
NamesSet = FrozenSet[str]

# Map of linkName -> targetName. Read-only view.
LinksMap = Mapping[str, str]

# Map of country code -> country name, from 'iso3166.tab'.
CountriesMap = Dict[str, str]


# -----------------------------------------------------------------------------
# Data types produced by the transformer package.
# -----------------------------------------------------------------------------

class RegionEntry(TypedDict):
    """A region of a country using a distinct timezone."""
    olson_description: str  # '' if the country has only a single region
    timezone_name: str  # not necessarily canonical, may be a link
    location_coords: str  # ISO 6709 coordinates, as written in zone.tab


class CountryRecord(TypedDict):
    """A country of the country selection table."""
    alpha2_code: str  # ISO 3166 alpha-2 uppercase country code
    olson_name: str  # English name as written in iso3166.tab
    regions: Dict[str, RegionEntry]  # {olson_description -> RegionEntry}


# Map of country code -> CountryRecord.
CountrySelection = Dict[str, CountryRecord]


# -----------------------------------------------------------------------------
# The complete metadata database which can be rendered into different forms by
# various generators (e.g. JSON).
# -----------------------------------------------------------------------------

class MetadataDatabase(TypedDict):
    """The complete internal representation of the metadata extracted from
    the TZ Database source files.
    """

    # Context data.
    tz_version: str
    tz_version_number: int
    tz_files: List[str]
    num_zones: int
    num_links: int
    num_countries: int

    # Data from the extractor and transformer packages.
    canonical_names: List[str]
    link_names: List[str]
    raw_links: Dict[str, str]
    threaded_links: Dict[str, str]
    country_selection: CountrySelection


def create_metadata_database(
    tz_version: str,
    tz_files: List[str],
    canonical_names: NamesSet,
    raw_links: LinksMap,
    threaded_links: LinksMap,
    country_selection: CountrySelection,
) -> MetadataDatabase:
    """Return an instance of MetadataDatabase from the various ingredients.
    Names and maps are sorted to provide deterministic output.
    """

    return {
        # Context data.
        'tz_version': tz_version,
        'tz_version_number': to_version_number(tz_version),
        'tz_files': tz_files,
        'num_zones': len(canonical_names),
        'num_links': len(raw_links),
        'num_countries': len(country_selection),

        # Extracted data.
        'canonical_names': sorted(canonical_names),
        'link_names': sorted(raw_links.keys()),
        'raw_links': _sort_links(raw_links),
        'threaded_links': _sort_links(threaded_links),
        'country_selection': _sort_country_selection(country_selection),
    }


def validate_version(version: str) -> str:
    """Return the version unchanged if it looks like '2024a', otherwise raise
    InvalidVersionError.
    """
    if not VERSION_PATTERN.fullmatch(version):
        raise InvalidVersionError(version)
    return version


def to_version_number(version: str) -> int:
    """Convert version string (e.g. '2020a') to an integer of the form YYNN
    (e.g. '2001'), where YY is (year - 2000) and NN is the patch number,
    where 'a' is 01.
    """
    validate_version(version)
    year = version[0:4]
    patch = version[4]
    return (int(year) - 2000) * 100 + (ord(patch) - ord('a') + 1)


def _sort_links(links: LinksMap) -> Dict[str, str]:
    return OrderedDict((k, v) for k, v in sorted(links.items()))


def _sort_country_selection(
    selection: CountrySelection
) -> CountrySelection:
    """Sort the countries by code, and the regions of each country by
    description.
    """
    result: CountrySelection = OrderedDict()
    for code, country in sorted(selection.items()):
        result[code] = {
            'alpha2_code': country['alpha2_code'],
            'olson_name': country['olson_name'],
            'regions': OrderedDict(sorted(country['regions'].items())),
        }
    return result
