# Copyright 2024 Brian T. Park
#
# MIT License

import logging
import os
import subprocess
from typing import Dict
from typing import Iterable
from typing import List
from typing import Set

from tzsourcetools.data_types.errors import ZoneinfoMismatchError


class ZicCompiler:
    """Drive the tzcode Makefile in the unpacked source directory to build
    the 'zic' compiler, and to compile the data files into a tree of binary
    tzfiles (see tzfile(5)).

    Two flavors of tzfiles can be built:

    * 'posix': no knowledge of leap seconds, for systems whose time_t is a
      flavor of UT (the POSIX convention)
    * 'right': includes the known leap seconds, for systems whose time_t is a
      count of TAI seconds
    """

    def __init__(self, source_dir: str, make: str = 'make'):
        self.source_dir = source_dir
        self.make = make
        self._zic_built = False
        # {flavor -> zoneinfo_dir}
        self._zoneinfo_dirs: Dict[str, str] = {}

    def zic_exe(self) -> str:
        """Build 'zic' if necessary, and return the path of the executable.
        """
        if not self._zic_built:
            logging.info('Building zic in %s', self.source_dir)
            self._run([self.make, 'zic'])
            self._zic_built = True
        return os.path.join(self.source_dir, 'zic')

    def compile(self, output_dir: str, leaps: bool = False) -> str:
        """Compile the data files into output_dir. Return output_dir."""
        flavor = 'right' if leaps else 'posix'
        if flavor not in self._zoneinfo_dirs:
            logging.info('Compiling %s zoneinfo files into %s',
                         flavor, output_dir)
            # TZDIR is interpreted relative to the cwd of make.
            tzdir = os.path.abspath(output_dir)
            self._run([self.make, f'{flavor}_only', f'TZDIR={tzdir}'])
            self._zoneinfo_dirs[flavor] = output_dir
        return self._zoneinfo_dirs[flavor]

    def _run(self, command: List[str]) -> None:
        """Run the command in source_dir. A failure raises
        subprocess.CalledProcessError.
        """
        logging.debug('Running %s', command)
        result = subprocess.run(
            command,
            cwd=self.source_dir,
            check=True,
            capture_output=True,
            text=True,
        )
        if result.stdout:
            logging.debug(result.stdout)


def list_zoneinfo_files(zoneinfo_dir: str) -> List[str]:
    """Return the sorted names of all the non-directory files under
    zoneinfo_dir, relative to zoneinfo_dir, with '/' separators.
    """
    names: List[str] = []
    for dirpath, _, filenames in os.walk(zoneinfo_dir):
        for filename in filenames:
            path = os.path.join(dirpath, filename)
            name = os.path.relpath(path, zoneinfo_dir)
            names.append(name.replace(os.sep, '/'))
    names.sort()
    return names


def verify_zoneinfo_tree(
    zoneinfo_dir: str,
    expected_names: Iterable[str],
) -> None:
    """Verify that zoneinfo_dir contains exactly one file for each of the
    expected zone and link names.

    Raises:
        ZoneinfoMismatchError: for the first unexpected file, otherwise for
            the first (in sorted order) missing file
    """
    missing: Set[str] = set(expected_names)
    for name in list_zoneinfo_files(zoneinfo_dir):
        if name not in missing:
            raise ZoneinfoMismatchError(name, 'unexpected')
        missing.remove(name)
    if missing:
        raise ZoneinfoMismatchError(sorted(missing)[0], 'missing')
    logging.info('Verified zoneinfo files in %s', zoneinfo_dir)
