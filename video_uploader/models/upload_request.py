from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Privacy:
    """Who can access an uploaded video"""
    comments: str = 'nobody'
    embed: str = 'public'
    view: str = 'password'
    download: bool = False

    def to_dict(self):
        return {
            'comments': self.comments,
            'embed': self.embed,
            'view': self.view,
            'download': self.download,
        }


@dataclass
class UploadSettings:
    """Video settings that must be set on every new upload"""
    privacy: Privacy = field(default_factory=Privacy)
    content_rating: List[str] = field(default_factory=lambda: ['safe'])

    @classmethod
    def from_config(cls, cfg):
        return cls(
            privacy=Privacy(
                comments=cfg.PRIVACY_COMMENTS,
                embed=cfg.PRIVACY_EMBED,
                view=cfg.PRIVACY_VIEW,
                download=cfg.PRIVACY_DOWNLOAD,
            ),
            content_rating=list(cfg.CONTENT_RATING),
        )


@dataclass
class UploadRequest:
    """Everything needed to upload one file"""
    identifier: str
    file_path: str
    size: int
    chunk_size: int
    description: str = ''
    password: str = ''
    settings: UploadSettings = field(default_factory=UploadSettings)
    calculated_name: str = ''

    @property
    def video_name(self):
        return self.calculated_name or self.identifier


@dataclass
class UploadResult:
    identifier: str
    resource_uri: str
    password: Optional[str] = None
    skipped: bool = False

    def to_dict(self):
        return {
            'success': True,
            'identifier': self.identifier,
            'resource_uri': self.resource_uri,
            'password': self.password,
            'skipped': self.skipped,
        }


@dataclass
class UploadSession:
    """A remote session as returned by session creation"""
    session_uri: str
    resource_uri: str
