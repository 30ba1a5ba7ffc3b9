import json
import logging
import os
import tempfile

from video_uploader.exceptions import StoreError
from video_uploader.models import UploadRecord

logger = logging.getLogger(__name__)

UPLOADS_FILENAME = 'uploads.json'


class FileSessionStore:
    """Upload records kept in a single JSON document.

    The whole document is read on every call and rewritten on every ``put``.
    Only one process may write to a given file at a time; concurrent writers
    can lose each other's updates.
    """

    def __init__(self, uploads_file):
        self.uploads_file = uploads_file

    @classmethod
    def from_folder(cls, output_folder):
        if not os.path.isdir(output_folder):
            raise StoreError(f"could not open output folder {output_folder}")
        return cls(os.path.join(output_folder, UPLOADS_FILENAME))

    def get(self, identifier):
        """Return the stored record, or an empty record if there is none"""
        records = self._load()
        data = records.get(identifier)
        if data is None:
            return UploadRecord()
        if not isinstance(data, dict):
            raise StoreError(f"record for {identifier} is not a JSON object: {data!r}")
        try:
            return UploadRecord.from_dict(data, name=identifier)
        except ValueError as e:
            raise StoreError(f"invalid record for {identifier}: {e}") from e

    def put(self, record):
        """Save the record, replacing any existing record with the same name"""
        if record.is_empty():
            raise StoreError(f"cannot save record {record!r}, name is empty")

        records = self._load()
        records[record.name] = record.to_dict()
        self._dump(records)
        logger.debug("Saved %s as %s", record.name, record.status)

    def _load(self):
        if not os.path.exists(self.uploads_file):
            return {}

        try:
            with open(self.uploads_file, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise StoreError(f"error reading uploads file: {e}") from e

        if not content.strip():
            return {}

        try:
            records = json.loads(content)
        except json.JSONDecodeError as e:
            raise StoreError(f"error parsing uploads file: {e}") from e

        if not isinstance(records, dict):
            raise StoreError(f"uploads file {self.uploads_file} does not contain a JSON object")
        return records

    def _dump(self, records):
        folder = os.path.dirname(os.path.abspath(self.uploads_file))
        try:
            fd, temp_path = tempfile.mkstemp(prefix='.uploads-', suffix='.json', dir=folder)
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(records, f, indent=2, sort_keys=True)
                os.replace(temp_path, self.uploads_file)
            except BaseException:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise
        except OSError as e:
            raise StoreError(f"error writing updated upload records: {e}") from e
