import logging
import time

from config import MEGABYTE
from video_uploader.exceptions import RemoteError, RetryBudgetExhaustedError, TransferStalledError
from video_uploader.services.vimeo_service import parse_offset
from video_uploader.utils.http import CONFLICT, TOO_MANY_REQUESTS, RetryPolicy, is_success

logger = logging.getLogger(__name__)


class ChunkedTransfer:
    """Streams the bytes the remote does not have yet, one chunk at a time.

    Every chunk is read from the file at its own offset, so a transfer can
    start anywhere in the file. The remote's Upload-Offset is authoritative:
    on a conflict the transfer jumps to whatever offset the remote reports.
    """

    def __init__(self, vimeo_service, retry_policy=None):
        self.vimeo = vimeo_service
        self.retry_policy = retry_policy or RetryPolicy()

    def transfer(self, session_uri, file_path, offset, total_size, chunk_size):
        """Upload ``file_path`` from ``offset`` to ``total_size``; returns the final offset"""
        if chunk_size <= 0:
            raise ValueError(f"chunk size must be positive, got {chunk_size}")

        max_attempts = self.retry_policy.max_attempts
        total_mb = total_size / MEGABYTE
        attempts = 0

        logger.info("Starting upload at offset %d of %d bytes (chunk size %.2f MB, ~%d chunks left)",
                    offset, total_size, chunk_size / MEGABYTE,
                    -(-(total_size - offset) // chunk_size))

        with open(file_path, 'rb') as f:
            while offset < total_size:
                length = min(chunk_size, total_size - offset)
                f.seek(offset)
                data = f.read(length)
                if len(data) != length:
                    raise OSError(f"short read from {file_path} at offset {offset}: "
                                  f"expected {length} bytes, got {len(data)}")

                chunk_start = time.monotonic()
                response = self.vimeo.append_chunk(session_uri, offset, data)
                chunk_time = time.monotonic() - chunk_start

                if response.status_code == TOO_MANY_REQUESTS:
                    attempts += 1
                    if attempts >= max_attempts:
                        raise RetryBudgetExhaustedError(
                            f"rate limited at offset {offset} of {session_uri} "
                            f"after {attempts} attempts")
                    logger.warning("Rate limited at offset %d (attempt %d/%d), waiting %ss before retry...",
                                   offset, attempts, max_attempts, self.retry_policy.cooldown_seconds)
                    self.retry_policy.wait()
                    continue

                if response.status_code == CONFLICT:
                    remote_offset = self._reported_offset(response, total_size)
                    if remote_offset is None:
                        raise RemoteError(f"offset conflict at {offset} without Upload-Offset",
                                          response.status_code, response.text)
                    if remote_offset == offset:
                        attempts += 1
                        self._stalled(offset, attempts, session_uri)
                        continue
                    logger.warning("Offset conflict: sent %d, remote holds %d. Resuming from remote offset",
                                   offset, remote_offset)
                    offset = remote_offset
                    attempts = 0
                    continue

                if not is_success(response):
                    raise RemoteError(f"chunk upload at offset {offset} failed",
                                      response.status_code, response.text)

                new_offset = self._reported_offset(response, total_size)
                if new_offset is None or new_offset <= offset:
                    attempts += 1
                    self._stalled(offset, attempts, session_uri)
                    continue

                chunk_mb = (new_offset - offset) / MEGABYTE
                speed = chunk_mb / chunk_time if chunk_time > 0 else 0
                offset = new_offset
                attempts = 0
                logger.info("✓ Progress: %.1f/%.1f MB (%.1f%%) - Speed: %.2f MB/s",
                            offset / MEGABYTE, total_mb, offset / total_size * 100, speed)

        return offset

    def _stalled(self, offset, attempts, session_uri):
        max_attempts = self.retry_policy.max_attempts
        if attempts >= max_attempts:
            raise TransferStalledError(
                f"upload offset of {session_uri} stuck at {offset} after {attempts} attempts")
        logger.warning("Upload offset did not advance past %d (attempt %d/%d), retrying chunk",
                       offset, attempts, max_attempts)
        self.retry_policy.wait()

    @staticmethod
    def _reported_offset(response, total_size):
        remote_offset = parse_offset(response)
        if remote_offset is not None and remote_offset > total_size:
            raise RemoteError(f"remote reports offset {remote_offset} beyond file size {total_size}",
                              response.status_code, response.text)
        return remote_offset
