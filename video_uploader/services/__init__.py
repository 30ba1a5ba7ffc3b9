from .session_store import FileSessionStore
from .vimeo_service import VimeoService
from .transfer import ChunkedTransfer
from .coordinator import UploadCoordinator
