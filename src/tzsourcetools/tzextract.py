#!/usr/bin/env python3
#
# Copyright 2024 Brian T. Park
#
# MIT License.

"""
Read the TZ Database source files from `--input_dir`, or from the tarballs
given by `--input_tarball`, extract the zone names, links and the country
selection table, and perform the actions selected by `--actions`.

The extraction has a number of stages implemented by various helper classes:

* RecordScanner and NameRegistry
    * Scan the data files for Zone and Link records, rejecting names which
      are defined more than once.
* LinkResolver
    * Resolve the chains of links to their canonical zones, rejecting cycles
      and links to missing zones.
* CountrySelectionBuilder
    * Join 'zone.tab' and 'iso3166.tab' into the country selection table.

Source Flags:

* `--input_dir {dir}`
    * Location of the unpacked TZDB files.
* `--input_tarball {file}`
    * A tzcode or tzdata tarball. May be repeated. The tarballs are unpacked
      into a temporary directory which is deleted at the end.
* `--data_files {list}`
    * Comma-separated list of data files, overriding the TDATA variable of
      the Makefile.
* `--tz_version {version}`
    * Version of the TZDB files, e.g. 2024a.

Workflow Flags:

* `--actions` flags is a comma-separated list of actions
    * json: Generate the `--json_file` file in `--output_dir`
    * zoneinfo: Compile the tzfiles using make and zic, verify them against
      the zone and link names, and copy them into `--output_dir`
* `--leaps`
    * Compile the 'right' tzfiles which know about leap seconds.

Examples:

    $ tzextract.py --input_dir ../tz --tz_version 2024a --actions json
"""

import argparse
import logging
import os
import shutil
import sys
from typing import List
from typing import Optional

from tzsourcetools.data_types.tz_types import validate_version
from tzsourcetools.generator.jsongenerator import JsonGenerator
from tzsourcetools.snapshot import TzSnapshot
from tzsourcetools.source.provider import DirectorySource
from tzsourcetools.source.provider import SourceProvider
from tzsourcetools.source.provider import TarballSource


def generate_json(
    snapshot: TzSnapshot,
    output_dir: str,
    json_file: str,
) -> None:
    """Generate JSON file. Activated for '--actions json'.
    """
    logging.info('==== Creating %s file', json_file)
    generator = JsonGenerator(
        mdb=snapshot.metadata_database(),
        json_file=json_file,
    )
    generator.generate_files(output_dir)


def generate_zoneinfo(
    snapshot: TzSnapshot,
    output_dir: str,
    leaps: bool,
) -> None:
    """Compile and copy the tzfiles. Activated for '--actions zoneinfo'.
    """
    logging.info('==== Compiling zoneinfo files')
    zoneinfo_dir = snapshot.zoneinfo_dir(leaps=leaps)
    target_dir = os.path.join(output_dir, os.path.basename(zoneinfo_dir))
    shutil.copytree(zoneinfo_dir, target_dir, symlinks=True)
    logging.info('Copied %s to %s', zoneinfo_dir, target_dir)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main driver for the TZ Database source extractor.

    Usage:
        tzextract.py [flags...]
    """
    # Configure command line flags.
    parser = argparse.ArgumentParser(
        description='Extract metadata from TZ Database sources.')

    # Source selector.
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--input_dir', help='Location of the unpacked TZDB files')
    source.add_argument(
        '--input_tarball',
        help='TZDB tarball (tzcode or tzdata), may be repeated',
        action='append',
    )
    parser.add_argument(
        '--data_files',
        help='Comma-separated list of data files (default: Makefile TDATA)',
        default='',
    )

    # The tz_version does not affect any data processing. Its value is
    # copied into the generated files.
    parser.add_argument(
        '--tz_version',
        help='Version string of the TZ files',
        required=True,
    )

    # Target action (i.e. output) selector.
    parser.add_argument(
        '--actions',
        help='Comma-separated list of actions (json|zoneinfo)',
        default='json',
    )
    parser.add_argument(
        '--leaps',
        help='Compile tzfiles which include leap seconds',
        action='store_true',
    )

    # For action=json, specify the output file.
    parser.add_argument(
        '--json_file',
        help='The JSON output file (default: tzmetadata.json)',
        default='tzmetadata.json',
    )

    # Target location of the generated files.
    parser.add_argument(
        '--output_dir',
        help='Location of the output directory',
        default='',
    )

    # Parse the command line arguments
    args = parser.parse_args(argv)

    # Validate the comma-separated --actions flag.
    actions = set(args.actions.split(','))
    allowed_actions = set(['json', 'zoneinfo'])
    if not actions.issubset(allowed_actions):
        print(f'Invalid --actions: {actions - allowed_actions}')
        sys.exit(1)

    # Configure logging. This should normally be executed after the
    # parser.parse_args() because it allows us set the logging.level using a
    # flag.
    logging.basicConfig(level=logging.INFO)

    validate_version(args.tz_version)
    data_files = args.data_files.split(',') if args.data_files else None

    logging.info('======== TZ Extractor settings')
    logging.info(f'TZ Version: {args.tz_version}')
    logging.info(f'Actions: {sorted(actions)}')
    logging.info(f'Leaps: {args.leaps}')

    provider: SourceProvider
    if args.input_dir:
        provider = DirectorySource(args.input_dir, data_files=data_files)
    else:
        provider = TarballSource(args.input_tarball, data_files=data_files)

    with TzSnapshot(provider, args.tz_version) as snapshot:
        logging.info('======== Extracting TZ Data files')
        snapshot.print_summary()

        logging.info('======== Performing actions, generating files')
        if 'json' in actions:
            generate_json(
                snapshot=snapshot,
                output_dir=args.output_dir,
                json_file=args.json_file,
            )
        if 'zoneinfo' in actions:
            generate_zoneinfo(
                snapshot=snapshot,
                output_dir=args.output_dir,
                leaps=args.leaps,
            )

    logging.info('======== Finished processing TZ Data files.')


if __name__ == '__main__':
    main()
