# Copyright 2024 Brian T. Park
#
# MIT License

import unittest

from tzsourcetools.data_types.tz_types import RawRecord
from tzsourcetools.extractor.scanner import RecordScanner
from tzsourcetools.extractor.scanner import scan_line

NORTHAMERICA = """\
# Rule	NAME	FROM	TO	-	IN	ON	AT	SAVE	LETTER
Rule	US	2007	max	-	Mar	Sun>=8	2:00	1:00	D

# Zone	NAME		STDOFF	RULES	FORMAT	[UNTIL]
Zone America/New_York	-4:56:02 -	LMT	1883 Nov 18 17:00u
			-5:00	US	E%sT	1920
			-5:00	NYC	E%sT	1942
Zone	America/Chicago	-5:50:36 -	LMT	1883 Nov 18 18:00u
			-6:00	US	C%sT
Link	America/New_York	US/Eastern
"""

BACKWARD = """\
Link	America/Chicago		US/Central	# comment
Link	US/Central		CST6CDT_alias
"""


class TestScanLine(unittest.TestCase):

    def test_zone_header(self) -> None:
        record = scan_line('Zone\tEurope/Paris\t0:09:21 -\tLMT', 'europe', 7)
        self.assertEqual(
            RawRecord('Zone', 'Europe/Paris', None, 'europe', 7), record)

    def test_zone_name_at_end_of_line(self) -> None:
        record = scan_line('Zone Etc/UTC', 'etcetera', 1)
        assert record is not None
        self.assertEqual('Etc/UTC', record.name)

    def test_link_header(self) -> None:
        record = scan_line('Link\tEtc/UTC\tEtc/Universal', 'backward', 3)
        self.assertEqual(
            RawRecord('Link', 'Etc/Universal', 'Etc/UTC', 'backward', 3),
            record)

    def test_link_with_trailing_comment(self) -> None:
        record = scan_line('Link  A/B  C/D  # old name', 'backward', 1)
        assert record is not None
        self.assertEqual(('C/D', 'A/B'), (record.name, record.target))

    def test_ignored_lines(self) -> None:
        self.assertIsNone(scan_line('', 'f', 1))
        self.assertIsNone(scan_line('# Zone Foo/Bar', 'f', 1))
        self.assertIsNone(scan_line('\t\t\t-5:00\tUS\tE%sT', 'f', 1))
        self.assertIsNone(scan_line('Rule\tUS\t1967\tonly', 'f', 1))
        self.assertIsNone(scan_line(' Zone Foo/Bar 1:00', 'f', 1))
        self.assertIsNone(scan_line('Zones Foo/Bar 1:00', 'f', 1))
        self.assertIsNone(scan_line('Link OnlyTarget', 'f', 1))

    def test_name_must_be_followed_by_whitespace(self) -> None:
        self.assertIsNone(scan_line('Zone Foo/Bar\r', 'f', 1))


class TestRecordScanner(unittest.TestCase):

    def test_scan_in_file_order(self) -> None:
        scanner = RecordScanner([
            ('northamerica', NORTHAMERICA),
            ('backward', BACKWARD),
        ])
        records = list(scanner.scan())
        self.assertEqual(
            [
                ('Zone', 'America/New_York', None, 'northamerica', 5),
                ('Zone', 'America/Chicago', None, 'northamerica', 8),
                ('Link', 'US/Eastern', 'America/New_York', 'northamerica',
                    10),
                ('Link', 'US/Central', 'America/Chicago', 'backward', 1),
                ('Link', 'CST6CDT_alias', 'US/Central', 'backward', 2),
            ],
            [tuple(r) for r in records],
        )
        self.assertEqual(2, scanner.zones_count)
        self.assertEqual(3, scanner.links_count)

    def test_empty_input(self) -> None:
        scanner = RecordScanner([])
        self.assertEqual([], list(scanner.scan()))


if __name__ == '__main__':
    unittest.main()
