# Copyright 2024 Brian T. Park
#
# MIT License

import logging
import os
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from tzsourcetools.compiler.zic import ZicCompiler
from tzsourcetools.compiler.zic import verify_zoneinfo_tree
from tzsourcetools.data_types.tz_types import CountrySelection
from tzsourcetools.data_types.tz_types import ISO3166_TAB
from tzsourcetools.data_types.tz_types import LinksMap
from tzsourcetools.data_types.tz_types import MetadataDatabase
from tzsourcetools.data_types.tz_types import NamesSet
from tzsourcetools.data_types.tz_types import ZONE_TAB
from tzsourcetools.data_types.tz_types import create_metadata_database
from tzsourcetools.data_types.tz_types import to_version_number
from tzsourcetools.data_types.tz_types import validate_version
from tzsourcetools.extractor.registry import NameRegistry
from tzsourcetools.extractor.registry import build_registry
from tzsourcetools.extractor.tables import parse_iso3166_tab
from tzsourcetools.extractor.tables import parse_zone_tab
from tzsourcetools.source.provider import SourceProvider
from tzsourcetools.transformer.countryselector import CountrySelectionBuilder
from tzsourcetools.transformer.linkresolver import LinkResolver


class TzSnapshot:
    """A local copy of one version of the TZ Database source, and the
    metadata extracted from it:

        with TzSnapshot(TarballSource([tzcode, tzdata]), '2024a') as snapshot:
            names = snapshot.canonical_names()
            links = snapshot.threaded_links()
            countries = snapshot.country_selection()
            zoneinfo_dir = snapshot.zoneinfo_dir()

    Every query is computed at most once. The names and links are returned as
    read-only views, and country_selection() as a new copy on each call. Any
    inconsistency of the source files raises a TzDataError, and nothing is
    returned for that query.

    The snapshot owns the files of its provider. They are deleted by close()
    (or at the end of the 'with' block), including the compiled zoneinfo
    trees, so anything to be kept must be copied out before.
    """

    def __init__(
        self,
        provider: SourceProvider,
        version: str,
        compiler: Optional[ZicCompiler] = None,
    ):
        self.provider = provider
        self.version = validate_version(version)
        self.compiler = (
            compiler if compiler is not None else ZicCompiler(provider.dir)
        )
        self._registry: Optional[NameRegistry] = None
        self._resolver: Optional[LinkResolver] = None
        self._selector: Optional[CountrySelectionBuilder] = None
        self._data_files: Optional[List[str]] = None
        # {flavor -> verified zoneinfo dir}
        self._zoneinfo_dirs: Dict[str, str] = {}

    # ------------------------------------------------------------------------
    # Basic information.
    # ------------------------------------------------------------------------

    @property
    def version_number(self) -> int:
        return to_version_number(self.version)

    @property
    def dir(self) -> str:
        """Directory holding the files of this snapshot. It does not move
        during the lifetime of the snapshot.
        """
        return self.provider.dir

    @property
    def unpacked_dir(self) -> str:
        return self.provider.dir

    def close(self) -> None:
        """Release the backing storage of the provider."""
        self.provider.close()

    def __enter__(self) -> 'TzSnapshot':
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ------------------------------------------------------------------------
    # Zone metadata.
    # ------------------------------------------------------------------------

    def canonical_names(self) -> NamesSet:
        """Names declared by Zone records, i.e. directly associated with a
        set of observance data.
        """
        return self._get_registry().canonical_names()

    def link_names(self) -> NamesSet:
        """Names declared by Link records, i.e. aliases of other names."""
        return self._get_registry().link_names()

    def all_names(self) -> NamesSet:
        return self._get_registry().all_names()

    def raw_links(self) -> LinksMap:
        """Map of {alias -> target} as written in the data files. A target
        may be another alias, or a name which does not exist.
        """
        return self._get_registry().raw_links()

    def threaded_links(self) -> LinksMap:
        """Map of {alias -> canonical name}. Every value is a member of
        canonical_names().
        """
        return self._get_resolver().threaded_links()

    def country_selection(self) -> CountrySelection:
        """Countries, their regions, and the timezone of each region, from
        'zone.tab' and 'iso3166.tab'. Intended only to help a human select a
        geographical timezone.
        """
        if self._selector is None:
            countries = parse_iso3166_tab(
                self.provider.read_text(ISO3166_TAB),
                self.provider.path_to(ISO3166_TAB),
            )
            rows = parse_zone_tab(
                self.provider.read_text(ZONE_TAB),
                self.provider.path_to(ZONE_TAB),
            )
            selector = CountrySelectionBuilder(countries, rows)
            selector.build()
            self._selector = selector
        return self._selector.build()

    def metadata_database(self) -> MetadataDatabase:
        """Collect all the extracted metadata into a single JSON-serializable
        object.
        """
        return create_metadata_database(
            tz_version=self.version,
            tz_files=self.provider.data_file_names(),
            canonical_names=self.canonical_names(),
            raw_links=self.raw_links(),
            threaded_links=self.threaded_links(),
            country_selection=self.country_selection(),
        )

    def print_summary(self) -> None:
        logging.info(f'TZ Version: {self.version}')
        self._get_registry().print_summary()
        self._get_resolver().print_summary()
        self.country_selection()
        assert self._selector is not None
        self._selector.print_summary()

    # ------------------------------------------------------------------------
    # Compiling zone data.
    # ------------------------------------------------------------------------

    def data_files(self) -> List[str]:
        """Paths of the data files, roughly one per continent, which are
        given to zic. The metadata queries read their own copy of these
        files.
        """
        if self._data_files is None:
            self._data_files = [
                self.provider.path_to(name)
                for name in self.provider.data_file_names()
            ]
        return list(self._data_files)

    def zic_exe(self) -> str:
        """Path of the 'zic' executable built from the tzcode sources."""
        return self.compiler.zic_exe()

    def zoneinfo_dir(self, leaps: bool = False) -> str:
        """Compile the binary tzfiles into a directory of the snapshot, and
        return its path. The files are named after all_names().

        Args:
            leaps: if True, build the 'right' tzfiles which know about leap
                seconds, otherwise the 'posix' tzfiles

        Raises:
            ZoneinfoMismatchError: the compiled files do not match all_names()
        """
        flavor = 'right' if leaps else 'posix'
        if flavor not in self._zoneinfo_dirs:
            output_dir = os.path.join(self.dir, f'zoneinfo_{flavor}')
            zoneinfo_dir = self.compiler.compile(output_dir, leaps=leaps)
            verify_zoneinfo_tree(zoneinfo_dir, self.all_names())
            self._zoneinfo_dirs[flavor] = zoneinfo_dir
        return self._zoneinfo_dirs[flavor]

    # ------------------------------------------------------------------------
    # Lazy construction of the helpers.
    # ------------------------------------------------------------------------

    def _get_registry(self) -> NameRegistry:
        if self._registry is None:
            self._registry = build_registry(self.provider.list_data_files())
        return self._registry

    def _get_resolver(self) -> LinkResolver:
        if self._resolver is None:
            registry = self._get_registry()
            self._resolver = LinkResolver(
                registry.raw_links(),
                registry.canonical_names(),
            )
        return self._resolver
