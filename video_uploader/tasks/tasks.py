import logging

from config import MEGABYTE
from video_uploader.exceptions import UploadFailedError

logger = logging.getLogger(__name__)


def upload_videos_task(coordinator, upload_requests, on_success=None):
    """Upload each request in turn; a failing file is reported and skipped.

    Returns one result dict per request, in order. ``on_success`` is called
    with the request and its UploadResult after each successful upload.
    """
    results = []
    for request in upload_requests:
        try:
            logger.info("📁 Starting upload: %s (%.2f MB)", request.identifier, request.size / MEGABYTE)
            result = coordinator.upload(request)
        except UploadFailedError as e:
            logger.error("❌ Upload error for %s: %s", e.identifier, e.cause)
            results.append({
                'success': False,
                'identifier': e.identifier,
                'file_path': request.file_path,
                'error': str(e.cause),
            })
            continue

        outcome = result.to_dict()
        outcome['file_path'] = request.file_path
        results.append(outcome)

        if on_success is not None:
            try:
                on_success(request, result)
            except OSError as e:
                logger.warning("⚠️ Post-upload step failed for %s: %s", request.identifier, e)

    succeeded = sum(1 for r in results if r['success'])
    logger.info("Finished %d uploads: %d succeeded, %d failed",
                len(results), succeeded, len(results) - succeeded)
    return results
