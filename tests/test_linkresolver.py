# Copyright 2024 Brian T. Park
#
# MIT License

import unittest
from typing import Dict

from tzsourcetools.data_types.errors import CycleDetectedError
from tzsourcetools.data_types.errors import DanglingLinkError
from tzsourcetools.data_types.tz_types import LinksMap
from tzsourcetools.data_types.tz_types import NamesSet
from tzsourcetools.extractor.registry import build_registry
from tzsourcetools.transformer.linkresolver import LinkResolver


def follow_chain(alias: str, raw_links: LinksMap, limit: int) -> str:
    """Follow the raw links from alias, at most 'limit' steps."""
    name = alias
    for _ in range(limit):
        if name not in raw_links:
            return name
        name = raw_links[name]
    raise AssertionError(f"Chain from {alias} longer than {limit}")


class TestLinkResolver(unittest.TestCase):

    def setUp(self) -> None:
        self.canonical: NamesSet = frozenset(['Z1', 'Z2'])
        self.raw_links: Dict[str, str] = {
            'A': 'Z1',
            'B': 'A',
            'C': 'B',
            'D': 'C',
            'E': 'Z2',
            'F': 'E',
        }

    def test_threaded_links(self) -> None:
        resolver = LinkResolver(self.raw_links, self.canonical)
        self.assertEqual(
            {
                'A': 'Z1',
                'B': 'Z1',
                'C': 'Z1',
                'D': 'Z1',
                'E': 'Z2',
                'F': 'Z2',
            },
            dict(resolver.threaded_links()))
        self.assertEqual(4, resolver.max_chain_length)
        self.assertEqual(['B', 'C', 'D', 'F'], resolver.links_to_links())

    def test_order_of_links_does_not_matter(self) -> None:
        reversed_links = dict(reversed(list(self.raw_links.items())))
        resolver = LinkResolver(reversed_links, self.canonical)
        expected = LinkResolver(self.raw_links, self.canonical)
        self.assertEqual(
            dict(expected.threaded_links()), dict(resolver.threaded_links()))
        self.assertEqual(4, resolver.max_chain_length)

    def test_threaded_links_agree_with_raw_chains(self) -> None:
        resolver = LinkResolver(self.raw_links, self.canonical)
        threaded = resolver.threaded_links()
        for alias in self.raw_links:
            target = follow_chain(
                alias, self.raw_links, resolver.max_chain_length + 1)
            self.assertIn(target, self.canonical)
            self.assertEqual(target, threaded[alias])

    def test_idempotent(self) -> None:
        resolver = LinkResolver(self.raw_links, self.canonical)
        first = resolver.threaded_links()
        second = resolver.threaded_links()
        self.assertIs(first, second)
        self.assertEqual(dict(first), dict(second))

    def test_no_links(self) -> None:
        resolver = LinkResolver({}, self.canonical)
        self.assertEqual({}, dict(resolver.threaded_links()))
        self.assertEqual(0, resolver.max_chain_length)

    def test_two_cycle(self) -> None:
        resolver = LinkResolver({'X': 'Y', 'Y': 'X'}, self.canonical)
        with self.assertRaises(CycleDetectedError) as cm:
            resolver.threaded_links()
        self.assertEqual('X', cm.exception.alias)

    def test_self_loop(self) -> None:
        resolver = LinkResolver({'X': 'X'}, self.canonical)
        with self.assertRaises(CycleDetectedError) as cm:
            resolver.threaded_links()
        self.assertEqual('X', cm.exception.alias)

    def test_chain_into_cycle(self) -> None:
        resolver = LinkResolver(
            {'A': 'Z1', 'W': 'X', 'X': 'Y', 'Y': 'Z', 'Z': 'X'},
            self.canonical,
        )
        with self.assertRaises(CycleDetectedError) as cm:
            resolver.threaded_links()
        self.assertEqual('X', cm.exception.alias)

    def test_dangling_link(self) -> None:
        resolver = LinkResolver({'X': 'Y'}, self.canonical)
        with self.assertRaises(DanglingLinkError) as cm:
            resolver.threaded_links()
        self.assertEqual('X', cm.exception.alias)
        self.assertEqual('Y', cm.exception.target)
        self.assertIn('X', str(cm.exception))
        self.assertIn('Y', str(cm.exception))

    def test_dangling_link_through_chain(self) -> None:
        resolver = LinkResolver({'X': 'W', 'W': 'Missing'}, self.canonical)
        with self.assertRaises(DanglingLinkError) as cm:
            resolver.threaded_links()
        self.assertEqual('X', cm.exception.alias)
        self.assertEqual('Missing', cm.exception.target)


class TestResolveFromDataFiles(unittest.TestCase):

    def test_two_cycle_in_data_files(self) -> None:
        registry = build_registry([
            ('backward', 'Link X Y\nLink Y X\n'),
        ])
        resolver = LinkResolver(
            registry.raw_links(), registry.canonical_names())
        with self.assertRaises(CycleDetectedError):
            resolver.threaded_links()

    def test_link_to_undeclared_zone(self) -> None:
        registry = build_registry([
            ('europe', 'Zone Z 1:00 - CET\n'),
            ('backward', 'Link Y X\n'),
        ])
        resolver = LinkResolver(
            registry.raw_links(), registry.canonical_names())
        with self.assertRaises(DanglingLinkError) as cm:
            resolver.threaded_links()
        self.assertEqual(('X', 'Y'), (cm.exception.alias, cm.exception.target))


if __name__ == '__main__':
    unittest.main()
