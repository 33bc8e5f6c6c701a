# Copyright 2024 Brian T. Park
#
# MIT License

import logging
from types import MappingProxyType
from typing import Dict
from typing import Iterable
from typing import Optional
from typing import Tuple

from tzsourcetools.data_types.errors import DuplicateDefinitionError
from tzsourcetools.data_types.tz_types import LinksMap
from tzsourcetools.data_types.tz_types import NamesSet
from tzsourcetools.data_types.tz_types import RawRecord
from tzsourcetools.extractor.scanner import RecordScanner


class NameRegistry:
    """Collect the canonical zone names and the raw links declared across all
    the data files. A name may be declared only once, whether as a Zone or as
    a Link, otherwise DuplicateDefinitionError is raised.

    The registry is frozen once constructed. All views are computed at most
    once and returned as read-only objects.
    """

    def __init__(self, records: Iterable[RawRecord]):
        # {name -> record}, to report where a duplicate was first seen
        seen: Dict[str, RawRecord] = {}
        zones: Dict[str, None] = {}
        links: Dict[str, str] = {}

        for record in records:
            previous = seen.get(record.name)
            if previous is not None:
                raise DuplicateDefinitionError(
                    name=record.name,
                    file_name=record.file_name,
                    line_number=record.line_number,
                    message=(
                        f"zone {record.name} multiply defined: "
                        f"{record.file_name}:{record.line_number}, previously "
                        f"{previous.file_name}:{previous.line_number}"
                    ),
                )
            seen[record.name] = record
            if record.kind == 'Zone':
                zones[record.name] = None
            else:
                assert record.target is not None
                links[record.name] = record.target

        self._canonical_names: NamesSet = frozenset(zones)
        self._raw_links: LinksMap = MappingProxyType(links)
        self._link_names: Optional[NamesSet] = None
        self._all_names: Optional[NamesSet] = None

    def canonical_names(self) -> NamesSet:
        """Names declared by Zone records."""
        return self._canonical_names

    def raw_links(self) -> LinksMap:
        """Map of {alias -> target} exactly as declared. The target may be
        another alias, or may not exist at all.
        """
        return self._raw_links

    def link_names(self) -> NamesSet:
        if self._link_names is None:
            self._link_names = frozenset(self._raw_links.keys())
        return self._link_names

    def all_names(self) -> NamesSet:
        if self._all_names is None:
            self._all_names = self._canonical_names | self.link_names()
        return self._all_names

    def print_summary(self) -> None:
        logging.info(
            f"Zones: {len(self._canonical_names)}"
            f"; Links: {len(self._raw_links)}")


def build_registry(
    data_files: Iterable[Tuple[str, str]]
) -> NameRegistry:
    """Scan the given (file_name, contents) pairs and return the NameRegistry.
    """
    scanner = RecordScanner(data_files)
    registry = NameRegistry(scanner.scan())
    scanner.print_summary()
    return registry
