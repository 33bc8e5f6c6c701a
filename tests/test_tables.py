# Copyright 2024 Brian T. Park
#
# MIT License

import unittest

from tzsourcetools.data_types.errors import DuplicateDefinitionError
from tzsourcetools.data_types.errors import MalformedLineError
from tzsourcetools.extractor.tables import decode_coordinates
from tzsourcetools.extractor.tables import parse_iso3166_tab
from tzsourcetools.extractor.tables import parse_zone_tab

ISO3166_TAB = """\
# ISO 3166 alpha-2 country codes
#
#country-
#code	name of country, territory, area, or subdivision
AD	Andorra
US	United States
"""

ZONE_TAB = """\
#country-
#code	coordinates	TZ	comments
AD	+4230+00131	Europe/Andorra
US	+404251-0740023	America/New_York	Eastern (most areas)
US	+415100-0873900	America/Chicago	Central (most areas)
"""


class TestParseIso3166Tab(unittest.TestCase):

    def test_parse(self) -> None:
        countries = parse_iso3166_tab(ISO3166_TAB)
        self.assertEqual(
            {'AD': 'Andorra', 'US': 'United States'}, countries)

    def test_comments_only(self) -> None:
        self.assertEqual({}, parse_iso3166_tab('# nothing here\n#\n'))
        self.assertEqual({}, parse_iso3166_tab(''))

    def test_duplicate_code(self) -> None:
        with self.assertRaises(DuplicateDefinitionError) as cm:
            parse_iso3166_tab('US\tUnited States\nUS\tAmerica\n')
        self.assertEqual('US', cm.exception.name)
        self.assertEqual(2, cm.exception.line_number)

    def test_malformed_lines(self) -> None:
        bad_lines = [
            'us\tUnited States\n',  # lowercase code
            'USA\tUnited States\n',  # 3-letter code
            'US United States\n',  # no tab
            'US\tX\n',  # name too short
            'US\tUnited States \n',  # trailing space
            '\n',  # blank line
            ' # indented comment\n',
        ]
        for bad_line in bad_lines:
            with self.subTest(line=bad_line):
                with self.assertRaises(MalformedLineError) as cm:
                    parse_iso3166_tab('AD\tAndorra\n' + bad_line, 'iso.tab')
                self.assertEqual(2, cm.exception.line_number)
                self.assertEqual('iso.tab', cm.exception.file_name)

    def test_last_line_without_newline(self) -> None:
        self.assertEqual(
            {'AD': 'Andorra'}, parse_iso3166_tab('AD\tAndorra'))


class TestParseZoneTab(unittest.TestCase):

    def test_parse(self) -> None:
        rows = parse_zone_tab(ZONE_TAB)
        self.assertEqual(3, len(rows))
        self.assertEqual(
            ('AD', '+4230+00131', 'Europe/Andorra', '', 3),
            tuple(rows[0]))
        self.assertEqual(
            ('US', '+404251-0740023', 'America/New_York',
                'Eastern (most areas)', 4),
            tuple(rows[1]))

    def test_coordinates_kept_literally(self) -> None:
        rows = parse_zone_tab('AQ\t-7824+10654\tAntarctica/Vostok\n')
        self.assertEqual('-7824+10654', rows[0].coordinates)

    def test_duplicate_country_and_region(self) -> None:
        with self.assertRaises(DuplicateDefinitionError) as cm:
            parse_zone_tab(
                'AD\t+4230+00131\tEurope/Andorra\n'
                'AD\t+4230+00131\tEurope/Paris\n'
            )
        self.assertEqual('AD', cm.exception.name)

    def test_same_country_different_regions(self) -> None:
        rows = parse_zone_tab(
            'US\t+404251-0740023\tAmerica/New_York\tEastern\n'
            'US\t+415100-0873900\tAmerica/Chicago\tCentral\n'
        )
        self.assertEqual(['Eastern', 'Central'], [r.region for r in rows])

    def test_malformed_lines(self) -> None:
        bad_lines = [
            'AD\t4230+00131\tEurope/Andorra\n',  # no sign
            'AD\t+423+00131\tEurope/Andorra\n',  # short latitude
            'AD\t+42300+00131\tEurope/Andorra\n',  # 5-digit latitude
            'AD\t+4230+0013\tEurope/Andorra\n',  # short longitude
            'AD\t+4230+00131\n',  # no zone
            'AD\t+4230+00131\tEurope/Andorra\t\n',  # empty region
            'AD\t+4230+00131\tEurope Andorra\n',  # space in name
            'AD +4230+00131 Europe/Andorra\n',  # spaces instead of tabs
            '\n',
        ]
        for bad_line in bad_lines:
            with self.subTest(line=bad_line):
                with self.assertRaises(MalformedLineError) as cm:
                    parse_zone_tab('# comment\n' + bad_line)
                self.assertEqual(2, cm.exception.line_number)


class TestDecodeCoordinates(unittest.TestCase):

    def test_degrees_and_minutes(self) -> None:
        latitude, longitude = decode_coordinates('+4230+00131')
        self.assertAlmostEqual(42.5, latitude)
        self.assertAlmostEqual(1 + 31 / 60, longitude)

    def test_degrees_minutes_seconds(self) -> None:
        latitude, longitude = decode_coordinates('+404251-0740023')
        self.assertAlmostEqual(40 + 42 / 60 + 51 / 3600, latitude)
        self.assertAlmostEqual(-(74 + 0 / 60 + 23 / 3600), longitude)

    def test_invalid(self) -> None:
        self.assertRaises(ValueError, decode_coordinates, '')
        self.assertRaises(ValueError, decode_coordinates, '+4230')
        self.assertRaises(ValueError, decode_coordinates, '4230+00131')


if __name__ == '__main__':
    unittest.main()
