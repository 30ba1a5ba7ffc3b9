# Models package
from .upload_record import UploadRecord, UploadStatus
from .upload_request import Privacy, UploadSettings, UploadRequest, UploadResult, UploadSession
