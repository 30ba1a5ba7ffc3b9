# Utils package
from .http import HttpTransport, RetryPolicy
from .logger import configure_logging
from .files import find_videos, build_upload_request, move_to_finished
from .metadata import ClassSchedule
