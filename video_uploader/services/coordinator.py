import logging

from video_uploader.exceptions import OrphanedSessionError, RemoteError, StoreError, UploadError, UploadFailedError
from video_uploader.models import UploadRecord, UploadResult, UploadStatus

logger = logging.getLogger(__name__)


class UploadCoordinator:
    """Decides, per file, whether to start, resume, or skip an upload.

    A file with no record gets a new remote session, which is saved before
    any byte is sent. A file whose record is complete is skipped without any
    network call. Anything else is resumed from the offset the remote reports.
    A freshly created session is assumed to hold zero bytes; if it does not,
    the first chunk's conflict response corrects the offset.

    Passwords are not stored, so only results for sessions created by this
    call carry one.
    """

    def __init__(self, store, vimeo_service, transfer):
        self.store = store
        self.vimeo = vimeo_service
        self.transfer = transfer

    def upload(self, request):
        """Upload one file; raises UploadFailedError carrying the cause"""
        try:
            return self._upload(request)
        except (UploadError, OSError) as e:
            raise UploadFailedError(request.identifier, e) from e

    def _upload(self, request):
        record = self.store.get(request.identifier)

        password = None
        if record.is_empty():
            record = self._start_session(request)
            password = request.password
            offset = 0
        elif record.is_complete():
            logger.info("%s was already uploaded to %s, skipping", request.identifier, record.resource_uri)
            return UploadResult(
                identifier=request.identifier,
                resource_uri=record.resource_uri,
                skipped=True,
            )
        else:
            offset = self.vimeo.get_upload_offset(record.session_uri)
            if offset > request.size:
                raise RemoteError(
                    f"remote holds {offset} bytes of {record.session_uri} "
                    f"but {request.file_path} is only {request.size} bytes")
            if offset == request.size:
                logger.info("%s was fully received by the remote but not recorded, marking complete",
                            request.identifier)
                return self._complete(record, request, password)
            logger.info("Resuming %s from offset %d of %d bytes", request.identifier, offset, request.size)

        self.transfer.transfer(
            record.session_uri,
            request.file_path,
            offset,
            request.size,
            request.chunk_size,
        )
        return self._complete(record, request, password)

    def _start_session(self, request):
        session = self.vimeo.create_upload_session(
            name=request.video_name,
            description=request.description,
            password=request.password,
            size=request.size,
            settings=request.settings,
        )
        record = UploadRecord(
            name=request.identifier,
            calculated_name=request.calculated_name,
            session_uri=session.session_uri,
            resource_uri=session.resource_uri,
            status=UploadStatus.IN_PROGRESS,
        )
        try:
            self.store.put(record)
        except StoreError as e:
            raise OrphanedSessionError(
                f"remote session created for {request.identifier} but could not be saved: {e}",
                session_uri=session.session_uri,
                resource_uri=session.resource_uri,
            ) from e
        return record

    def _complete(self, record, request, password=None):
        record.status = UploadStatus.COMPLETE
        try:
            self.store.put(record)
        except StoreError as e:
            logger.warning("%s uploaded but its record could not be saved: %s", request.identifier, e)

        logger.info("✅ Upload of %s complete: %s", request.identifier, record.resource_uri)
        return UploadResult(
            identifier=request.identifier,
            resource_uri=record.resource_uri,
            password=password,
        )
