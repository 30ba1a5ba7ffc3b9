import logging

import requests

from video_uploader.exceptions import OffsetUnavailableError, RemoteError, RetryBudgetExhaustedError
from video_uploader.models import UploadSession
from video_uploader.utils.http import TOO_MANY_REQUESTS, RetryPolicy, is_success

logger = logging.getLogger(__name__)

TUS_VERSION = '1.0.0'
VIMEO_ACCEPT = 'application/vnd.vimeo.*+json;version=3.4'


def parse_offset(response):
    """Read the Upload-Offset header; None when the remote did not send one"""
    value = response.headers.get('Upload-Offset')
    if value is None or value == '':
        return None
    try:
        offset = int(value)
    except (TypeError, ValueError):
        raise RemoteError(f"invalid Upload-Offset header {value!r}",
                          response.status_code, response.text)
    if offset < 0:
        raise RemoteError(f"negative Upload-Offset header {value!r}",
                          response.status_code, response.text)
    return offset


class VimeoService:
    """Vimeo API calls used by a tus upload.

    Session creation and offset queries go through ``api_transport``; chunk
    appends go through ``upload_transport``, which is expected to carry a much
    longer timeout.
    """

    def __init__(self, access_token, api_url, api_transport, upload_transport, retry_policy=None):
        self.access_token = access_token
        self.api_url = api_url.rstrip('/')
        self.api_transport = api_transport
        self.upload_transport = upload_transport
        self.retry_policy = retry_policy or RetryPolicy()

    def create_upload_session(self, name, description, password, size, settings):
        """Open a tus upload session for a new video.

        Returns an UploadSession holding the chunk upload link and the
        video's URI.
        """
        url = f"{self.api_url}/me/videos"
        headers = {
            'Authorization': f"bearer {self.access_token}",
            'Content-Type': 'application/json',
            'Accept': VIMEO_ACCEPT,
        }
        body = {
            'name': name,
            'description': description,
            'password': password,
            'privacy': settings.privacy.to_dict(),
            'content_rating': list(settings.content_rating),
            'upload': {
                'approach': 'tus',
                'size': str(size),
            },
        }

        max_attempts = self.retry_policy.max_attempts
        for attempt in range(1, max_attempts + 1):
            response = self._send(self.api_transport, 'POST', url, headers=headers, json=body)

            if response.status_code == TOO_MANY_REQUESTS:
                self._rate_limited(f"creating upload session for {name}", attempt)
                continue

            if not is_success(response):
                raise RemoteError(f"could not create upload session for {name}",
                                  response.status_code, response.text)

            session = self._parse_session(response)
            logger.info("Created upload session for %s: %s", name, session.resource_uri)
            return session

        raise RetryBudgetExhaustedError(
            f"rate limited while creating upload session for {name} "
            f"after {max_attempts} attempts")

    def get_upload_offset(self, session_uri):
        """Ask the remote how many bytes of the upload it already holds"""
        max_attempts = self.retry_policy.max_attempts
        for attempt in range(1, max_attempts + 1):
            response = self._send(self.api_transport, 'HEAD', session_uri,
                                  headers=self._tus_headers())

            if response.status_code == TOO_MANY_REQUESTS:
                self._rate_limited(f"querying offset of {session_uri}", attempt)
                continue

            if not is_success(response):
                raise RemoteError(f"could not query offset of {session_uri}",
                                  response.status_code, response.text)

            offset = parse_offset(response)
            if offset is not None:
                logger.debug("Remote holds %d bytes of %s", offset, session_uri)
                return offset

            logger.warning("No Upload-Offset in response for %s (attempt %d/%d)",
                           session_uri, attempt, max_attempts)
            if attempt < max_attempts:
                self.retry_policy.wait()

        raise OffsetUnavailableError(
            f"could not determine upload offset of {session_uri} after {max_attempts} attempts")

    def append_chunk(self, session_uri, offset, data):
        """Send one chunk starting at ``offset``; the raw response is returned"""
        headers = self._tus_headers()
        headers.update({
            'Upload-Offset': str(offset),
            'Content-Type': 'application/offset+octet-stream',
        })
        return self._send(self.upload_transport, 'PATCH', session_uri, headers=headers, data=data)

    def _tus_headers(self):
        return {
            'Tus-Resumable': TUS_VERSION,
            'Accept': VIMEO_ACCEPT,
        }

    def _send(self, transport, method, url, **kwargs):
        try:
            return transport.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise RemoteError(f"{method} {url} failed: {e}") from e

    def _rate_limited(self, action, attempt):
        max_attempts = self.retry_policy.max_attempts
        logger.warning("Rate limited while %s (attempt %d/%d)", action, attempt, max_attempts)
        if attempt < max_attempts:
            logger.warning("Waiting %ss before retry...", self.retry_policy.cooldown_seconds)
            self.retry_policy.wait()

    @staticmethod
    def _parse_session(response):
        try:
            data = response.json()
        except ValueError as e:
            raise RemoteError("upload session response is not JSON",
                              response.status_code, response.text) from e

        if not isinstance(data, dict):
            data = {}
        upload = data.get('upload') or {}
        session_uri = upload.get('upload_link')
        resource_uri = data.get('uri')
        if not session_uri or not resource_uri:
            raise RemoteError("upload session response is missing upload_link or uri",
                              response.status_code, response.text)
        return UploadSession(session_uri=session_uri, resource_uri=resource_uri)
