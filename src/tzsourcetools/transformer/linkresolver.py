# Copyright 2024 Brian T. Park
#
# MIT License

import logging
from types import MappingProxyType
from typing import Dict
from typing import List
from typing import Optional
from typing import Set

from tzsourcetools.data_types.errors import CycleDetectedError
from tzsourcetools.data_types.errors import DanglingLinkError
from tzsourcetools.data_types.tz_types import LinksMap
from tzsourcetools.data_types.tz_types import NamesSet


class LinkResolver:
    """Thread the raw links (alias -> target) so that every alias points
    directly to its canonical Zone. Links to links are followed to the end of
    the chain. TZDB 2022f started to use links to links in the 'backward'
    file, so they cannot be rejected anymore.

    Each alias has exactly one target, so the links form a functional graph.
    Every chain is walked once, with a visited set to detect cycles, and the
    result of every alias on the walked path is recorded so that later chains
    stop as soon as they reach an already resolved alias.
    """

    def __init__(self, raw_links: LinksMap, canonical_names: NamesSet):
        self.raw_links = raw_links
        self.canonical_names = canonical_names
        self.max_chain_length = 0
        # {alias -> number of links followed to reach its zone}
        self._depths: Dict[str, int] = {}
        self._threaded_links: Optional[LinksMap] = None

    def threaded_links(self) -> LinksMap:
        """Return the read-only map of {alias -> canonical zone name}.

        Raises:
            CycleDetectedError: if an alias leads back to itself
            DanglingLinkError: if an alias leads to a name which is not a zone
        """
        if self._threaded_links is None:
            resolved: Dict[str, str] = {}
            for alias in self.raw_links:
                self._resolve(alias, resolved)
            self._threaded_links = MappingProxyType(resolved)
        return self._threaded_links

    def _resolve(self, alias: str, resolved: Dict[str, str]) -> str:
        if alias in resolved:
            return resolved[alias]

        # Walk the chain until a name which is not an alias, or an alias which
        # has already been resolved.
        path: List[str] = []
        visited: Set[str] = set()
        name = alias
        while name in self.raw_links and name not in resolved:
            if name in visited:
                raise CycleDetectedError(name)
            visited.add(name)
            path.append(name)
            name = self.raw_links[name]

        if name in resolved:
            target = resolved[name]
            depth = self._depths[name]
        elif name in self.canonical_names:
            target = name
            depth = 0
        else:
            raise DanglingLinkError(alias, name)

        for name in reversed(path):
            depth += 1
            resolved[name] = target
            self._depths[name] = depth
        self.max_chain_length = max(self.max_chain_length, depth)
        return target

    def links_to_links(self) -> List[str]:
        """Return the aliases whose immediate target is another alias."""
        return [
            alias for alias, target in self.raw_links.items()
            if target in self.raw_links
        ]

    def print_summary(self) -> None:
        threaded_links = self.threaded_links()
        logging.info(
            f"Links: {len(threaded_links)}"
            f"; Links to links: {len(self.links_to_links())}"
            f"; Longest chain: {self.max_chain_length}")
