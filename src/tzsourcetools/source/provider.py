# Copyright 2024 Brian T. Park
#
# MIT License

"""
Source providers give access to a local copy of the TZ Database source files.
Retrieving the files from the network is not done here: a DirectorySource
reads an already unpacked directory, and a TarballSource unpacks downloaded
'tzcode*.tar.gz' and 'tzdata*.tar.gz' files into a private temporary
directory which is deleted by close().
"""

import logging
import os
import shutil
import tarfile
import tempfile
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple
from typing_extensions import Protocol

from tzsourcetools.data_types.tz_types import ZONE_FILES
from tzsourcetools.extractor.makefile import find_data_files


# Extraction filters only exist on recent releases of each Python version.
_EXTRACT_OPTIONS: Dict[str, Any] = (
    {'filter': 'data'} if hasattr(tarfile, 'data_filter') else {}
)


class SourceProvider(Protocol):
    """Define an interface for source providers for mypy type checking."""

    @property
    def dir(self) -> str:
        ...

    def data_file_names(self) -> List[str]:
        ...

    def list_data_files(self) -> List[Tuple[str, str]]:
        ...

    def path_to(self, name: str) -> str:
        ...

    def read_text(self, name: str) -> str:
        ...

    def close(self) -> None:
        ...


class DirectorySource:
    """Provide the TZDB source files located in 'input_dir'. The directory is
    owned by the caller and is never deleted.
    """

    def __init__(
        self,
        input_dir: str,
        data_files: Optional[Sequence[str]] = None,
    ):
        """
        Args:
            input_dir: directory containing the unpacked TZDB files
            data_files: names of the data files containing Zone and Link
                records. If None, they are taken from the TDATA variable of
                the Makefile, or ZONE_FILES if that is not available.
        """
        self._dir = os.path.abspath(input_dir)
        self._data_files: Optional[List[str]] = (
            list(data_files) if data_files is not None else None
        )

    @property
    def dir(self) -> str:
        return self._dir

    def data_file_names(self) -> List[str]:
        """Return the names of the data files, relative to dir."""
        if self._data_files is None:
            self._data_files = self._find_data_files()
        return list(self._data_files)

    def list_data_files(self) -> List[Tuple[str, str]]:
        """Return the ordered (path, contents) of the data files."""
        return [
            (self.path_to(name), self.read_text(name))
            for name in self.data_file_names()
        ]

    def path_to(self, name: str) -> str:
        return os.path.join(self._dir, name)

    def read_text(self, name: str) -> str:
        with open(self.path_to(name), encoding='utf-8') as f:
            return f.read()

    def close(self) -> None:
        pass

    def __enter__(self) -> 'DirectorySource':
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _find_data_files(self) -> List[str]:
        makefile = self.path_to('Makefile')
        if os.path.isfile(makefile):
            with open(makefile, encoding='utf-8') as f:
                names = find_data_files(f.read())
            if names:
                logging.info('Data files from Makefile TDATA: %s', names)
                return names
        logging.info('Using default data files: %s', ZONE_FILES)
        return list(ZONE_FILES)


class TarballSource(DirectorySource):
    """Unpack the given tarballs (normally the 'tzcode' and 'tzdata' tar.gz
    files of the same version) into a new temporary directory. The directory
    and everything in it is removed by close(), so files which must be kept
    have to be copied elsewhere first.
    """

    def __init__(
        self,
        tarballs: Sequence[str],
        data_files: Optional[Sequence[str]] = None,
    ):
        super().__init__(
            tempfile.mkdtemp(prefix='tzsource-'),
            data_files=data_files,
        )
        self.tarballs = list(tarballs)
        self._closed = False
        try:
            for tarball in self.tarballs:
                logging.info('Extracting %s into %s', tarball, self.dir)
                with tarfile.open(tarball, 'r:*') as tar:
                    tar.extractall(path=self.dir, **_EXTRACT_OPTIONS)
        except BaseException:
            self.close()
            raise

    def close(self) -> None:
        if not self._closed:
            shutil.rmtree(self.dir, ignore_errors=True)
            self._closed = True
