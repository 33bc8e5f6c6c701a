# Copyright 2024 Brian T. Park
#
# MIT License

import json
import logging
import os

from tzsourcetools.data_types.tz_types import MetadataDatabase


class JsonGenerator:
    """Render the MetadataDatabase as a JSON document. The names and maps of
    the database are already sorted by create_metadata_database(), so the
    output is stable from one run to the next.
    """

    def __init__(self, mdb: MetadataDatabase, json_file: str):
        self.mdb = mdb
        self.json_file = json_file

    def to_json(self) -> str:
        """Return the document, with a terminating newline."""
        return json.dumps(self.mdb, indent=2, ensure_ascii=False) + '\n'

    def generate_files(self, output_dir: str) -> str:
        """Write the document to 'json_file' in output_dir. Return the full
        path of the file.
        """
        full_filename = os.path.join(output_dir, self.json_file)
        with open(full_filename, 'w', encoding='utf-8') as output_file:
            output_file.write(self.to_json())
        logging.info("Created %s (%d zones, %d links)", full_filename,
                     self.mdb['num_zones'], self.mdb['num_links'])
        return full_filename
