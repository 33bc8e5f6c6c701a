# Copyright 2024 Brian T. Park
#
# MIT License

import logging
import re
from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Tuple

from tzsourcetools.data_types.tz_types import RawRecord

# A name is a maximal run of printable, non-space ASCII characters. It must be
# followed by a space, a tab, or the end of the line.
ZONE_PATTERN = re.compile(r'Zone[ \t]+([!-~]+)(?=[ \t\n]|$)')
LINK_PATTERN = re.compile(
    r'Link[ \t]+([!-~]+)[ \t]+([!-~]+)(?=[ \t\n]|$)'
)


class RecordScanner:
    """Scan the raw TZDB data files (e.g. 'africa', 'asia', 'backward') for the
    headers of the 'Zone' and 'Link' records. Continuation lines of multi-line
    Zone records, 'Rule' lines, comments and blank lines are ignored.

    Usage:
        scanner = RecordScanner([('africa', text), ('asia', text), ...])
        for record in scanner.scan():
            ...
    """

    def __init__(self, data_files: Iterable[Tuple[str, str]]):
        """
        Args:
            data_files: ordered (file_name, contents) pairs. The order does not
                change the result, but determines which of two duplicate
                declarations is reported.
        """
        self.data_files = data_files
        self.zones_count = 0
        self.links_count = 0
        self.lines_count = 0

    def scan(self) -> Iterator[RawRecord]:
        for file_name, contents in self.data_files:
            logging.debug('Scanning %s', file_name)
            for line_number, line in enumerate(contents.split('\n'), start=1):
                self.lines_count += 1
                record = scan_line(line, file_name, line_number)
                if record is None:
                    continue
                if record.kind == 'Zone':
                    self.zones_count += 1
                else:
                    self.links_count += 1
                yield record

    def print_summary(self) -> None:
        logging.info(
            f"Lines: {self.lines_count}"
            f"; Zones: {self.zones_count}"
            f"; Links: {self.links_count}")


def scan_line(
    line: str,
    file_name: str,
    line_number: int,
) -> Optional[RawRecord]:
    """Return the RawRecord declared by the given line, or None if the line
    is not a Zone or Link header.
    """
    match = ZONE_PATTERN.match(line)
    if match:
        return RawRecord(
            kind='Zone',
            name=match.group(1),
            target=None,
            file_name=file_name,
            line_number=line_number,
        )

    match = LINK_PATTERN.match(line)
    if match:
        target, name = match.group(1), match.group(2)
        return RawRecord(
            kind='Link',
            name=name,
            target=target,
            file_name=file_name,
            line_number=line_number,
        )

    return None
