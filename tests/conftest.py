"""
Shared fixtures for the uploader tests.

The remote is simulated by ``FakeVimeo``, an in-memory stand-in for the Vimeo
API and its tus upload endpoint. It is passed in wherever a transport is
expected and returns real ``requests.Response`` objects.
"""

import json
import os

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from video_uploader.models import UploadRequest, UploadSettings
from video_uploader.services import ChunkedTransfer, FileSessionStore, UploadCoordinator, VimeoService
from video_uploader.utils import RetryPolicy

API_URL = 'https://api.vimeo.test'
COOLDOWN = 5.0


def make_response(status_code, headers=None, body=None):
    response = requests.Response()
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers or {})
    if body is None:
        response._content = b''
    elif isinstance(body, (dict, list)):
        response._content = json.dumps(body).encode('utf-8')
    else:
        response._content = body.encode('utf-8')
    response.encoding = 'utf-8'
    return response


class FakeVimeo:
    """Vimeo API plus tus endpoint holding a single upload session.

    Responses queued with ``queue`` are returned, per HTTP method, before the
    default behaviour kicks in.
    """

    SESSION_URI = 'https://tus.vimeo.test/upload/1'
    RESOURCE_URI = '/videos/1'

    def __init__(self, offset=0, keep_data=False):
        self.offset = offset
        self.size = None
        self.keep_data = keep_data
        self.calls = []
        self.appends = []
        self.received = bytearray()
        self.scripted = {}

    def queue(self, method, *responses):
        self.scripted.setdefault(method, []).extend(responses)

    def calls_for(self, method):
        return [call for call in self.calls if call[0] == method]

    def request(self, method, url, **kwargs):
        recorded = dict(kwargs)
        if method == 'PATCH':
            data = kwargs.get('data') or b''
            self.appends.append((int(kwargs['headers']['Upload-Offset']), len(data)))
            if not self.keep_data:
                recorded['data'] = None
        self.calls.append((method, url, recorded))

        if self.scripted.get(method):
            response = self.scripted[method].pop(0)
            if isinstance(response, Exception):
                raise response
            return response

        return getattr(self, f"_handle_{method.lower()}")(url, **kwargs)

    def _handle_post(self, url, json=None, **kwargs):
        self.size = int(json['upload']['size'])
        self.offset = 0
        return make_response(200, body={
            'uri': self.RESOURCE_URI,
            'link': 'https://vimeo.test/1',
            'upload': {'approach': 'tus', 'upload_link': self.SESSION_URI},
        })

    def _handle_head(self, url, **kwargs):
        return make_response(200, headers={'Upload-Offset': str(self.offset)})

    def _handle_patch(self, url, headers=None, data=None, **kwargs):
        sent_offset = int(headers['Upload-Offset'])
        if sent_offset != self.offset:
            return make_response(409, headers={'Upload-Offset': str(self.offset)})
        self.offset += len(data)
        if self.keep_data:
            self.received.extend(data)
        return make_response(204, headers={'Upload-Offset': str(self.offset)})


@pytest.fixture
def fake_remote():
    return FakeVimeo()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def retry_policy(sleeps):
    return RetryPolicy(max_attempts=2, cooldown_seconds=COOLDOWN, sleep=sleeps.append)


@pytest.fixture
def vimeo_service(fake_remote, retry_policy):
    return VimeoService('test-token', API_URL, fake_remote, fake_remote, retry_policy)


@pytest.fixture
def transfer(vimeo_service, retry_policy):
    return ChunkedTransfer(vimeo_service, retry_policy)


@pytest.fixture
def store(tmp_path):
    return FileSessionStore.from_folder(str(tmp_path))


@pytest.fixture
def coordinator(store, vimeo_service, transfer):
    return UploadCoordinator(store, vimeo_service, transfer)


@pytest.fixture
def make_video(tmp_path):
    """Create a video file of ``size`` bytes; sparse files are not filled in"""
    videos = tmp_path / 'videos'
    videos.mkdir(exist_ok=True)

    def _make(name='clip.mp4', size=1000, sparse=False):
        path = videos / name
        with open(path, 'wb') as f:
            if sparse:
                f.truncate(size)
            else:
                f.write(os.urandom(size))
        return str(path)

    return _make


@pytest.fixture
def make_request():
    def _make(file_path, identifier=None, size=None, chunk_size=400, password='cedar_otter_quill_amber'):
        return UploadRequest(
            identifier=identifier or os.path.basename(file_path),
            file_path=file_path,
            size=size if size is not None else os.path.getsize(file_path),
            chunk_size=chunk_size,
            description='Advanced Tap - Week 3',
            password=password,
            settings=UploadSettings(),
            calculated_name='Advanced Tap 2023 Spring - Week 3',
        )

    return _make
