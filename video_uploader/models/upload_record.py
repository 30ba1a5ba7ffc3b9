from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class UploadStatus(Enum):
    COMPLETE = 'COMPLETE'
    IN_PROGRESS = 'IN_PROGRESS'
    ERROR = 'ERROR'


@dataclass
class UploadRecord:
    """Progress of one file's upload, keyed by ``name`` in the uploads file.

    A record with an empty name stands for "no record". If an upload fails
    after its session URI was saved it can be resumed from the remote offset.
    """
    name: str = ''
    calculated_name: str = ''
    session_uri: str = ''
    resource_uri: str = ''
    status: Optional[UploadStatus] = None
    error_details: Optional[Any] = None

    def is_empty(self):
        return self.name == ''

    def is_complete(self):
        return self.status == UploadStatus.COMPLETE

    def to_dict(self):
        data = {
            'name': self.name,
            'calculated_name': self.calculated_name,
            'session_uri': self.session_uri,
            'resource_uri': self.resource_uri,
            'status': self.status.value if self.status else '',
        }
        if self.error_details is not None:
            data['error_details'] = self.error_details
        return data

    @classmethod
    def from_dict(cls, data, name=''):
        """Build a record from its stored form; ``name`` is the key it was stored under"""
        status = data.get('status')
        return cls(
            name=data.get('name') or name,
            calculated_name=data.get('calculated_name', ''),
            session_uri=data.get('session_uri', ''),
            resource_uri=data.get('resource_uri', ''),
            status=UploadStatus(status) if status else None,
            error_details=data.get('error_details'),
        )
