# Copyright 2024 Brian T. Park
#
# MIT License

import logging
from typing import Iterable
from typing import Optional

from tzsourcetools.data_types.errors import DuplicateDefinitionError
from tzsourcetools.data_types.errors import InvalidRegionGroupingError
from tzsourcetools.data_types.errors import UnknownCountryError
from tzsourcetools.data_types.tz_types import CountriesMap
from tzsourcetools.data_types.tz_types import CountrySelection
from tzsourcetools.data_types.tz_types import ZoneTabRow


class CountrySelectionBuilder:
    """Join the rows of 'zone.tab' with the country names of 'iso3166.tab' to
    create the CountrySelection used to help a human select a timezone by
    country, then region:

        {
            'US': {
                'alpha2_code': 'US',
                'olson_name': 'United States',
                'regions': {
                    'Eastern (most areas)': {
                        'olson_description': 'Eastern (most areas)',
                        'timezone_name': 'America/New_York',
                        'location_coords': '+404251-0740023',
                    },
                    ...
                },
            },
            ...
        }

    The zone names are not checked against the Zone and Link names. They are
    normally the name which refers to a location in the country, which may be
    a Link.
    """

    def __init__(
        self,
        countries: CountriesMap,
        zone_tab_rows: Iterable[ZoneTabRow],
    ):
        self.countries = countries
        self.zone_tab_rows = zone_tab_rows
        self._selection: Optional[CountrySelection] = None

    def build(self) -> CountrySelection:
        """Return the CountrySelection.

        Raises:
            UnknownCountryError: row refers to a code not in iso3166.tab
            DuplicateDefinitionError: (code, region) appears twice
            InvalidRegionGroupingError: a country mixes the '' region with
                named regions
        """
        if self._selection is not None:
            return _copy_selection(self._selection)

        selection: CountrySelection = {}
        for row in self.zone_tab_rows:
            code = row.country_code
            country = selection.get(code)
            if country is None:
                olson_name = self.countries.get(code)
                if olson_name is None:
                    raise UnknownCountryError(code)
                country = {
                    'alpha2_code': code,
                    'olson_name': olson_name,
                    'regions': {},
                }
                selection[code] = country

            regions = country['regions']
            if row.region in regions:
                raise DuplicateDefinitionError(
                    name=code,
                    line_number=row.line_number,
                    message=(
                        f"duplicate entry for {code} "
                        f"(region '{row.region}')"
                    ),
                )
            regions[row.region] = {
                'olson_description': row.region,
                'timezone_name': row.zone_name,
                'location_coords': row.coordinates,
            }

        # The grouping can only be verified once all the rows of the country
        # have been seen.
        for code, country in selection.items():
            regions = country['regions']
            if '' in regions and len(regions) != 1:
                raise InvalidRegionGroupingError(code)

        self._selection = selection
        return _copy_selection(selection)

    def print_summary(self) -> None:
        selection = self.build()
        region_count = sum(len(c['regions']) for c in selection.values())
        multi_count = sum(
            1 for c in selection.values() if '' not in c['regions']
        )
        logging.info(
            f"Countries: {len(selection)}"
            f"; Regions: {region_count}"
            f"; Multi-region countries: {multi_count}")


def _copy_selection(selection: CountrySelection) -> CountrySelection:
    """Return a copy of the selection which shares no mutable dict with it."""
    return {
        code: {
            'alpha2_code': country['alpha2_code'],
            'olson_name': country['olson_name'],
            'regions': {
                description: {
                    'olson_description': region['olson_description'],
                    'timezone_name': region['timezone_name'],
                    'location_coords': region['location_coords'],
                }
                for description, region in country['regions'].items()
            },
        }
        for code, country in selection.items()
    }
