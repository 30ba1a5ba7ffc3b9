import time

from config import config


def create_uploader(config_name='default', api_transport=None, upload_transport=None, sleep=time.sleep):
    """Uploader factory function.

    Reads the selected configuration once and wires the store, the two HTTP
    transports and the transfer engine into an UploadCoordinator.
    """
    from video_uploader.services import ChunkedTransfer, FileSessionStore, UploadCoordinator, VimeoService
    from video_uploader.utils import HttpTransport, RetryPolicy

    cfg = config[config_name]

    store = FileSessionStore.from_folder(cfg.OUTPUT_FOLDER_PATH)
    retry_policy = RetryPolicy(
        max_attempts=cfg.MAX_ATTEMPTS,
        cooldown_seconds=cfg.RATE_LIMIT_COOLDOWN_SECONDS,
        sleep=sleep,
    )
    vimeo = VimeoService(
        access_token=cfg.VIMEO_ACCESS_TOKEN,
        api_url=cfg.VIMEO_API_URL,
        api_transport=api_transport or HttpTransport(cfg.API_TIMEOUT),
        upload_transport=upload_transport or HttpTransport(cfg.UPLOAD_TIMEOUT),
        retry_policy=retry_policy,
    )
    return UploadCoordinator(store, vimeo, ChunkedTransfer(vimeo, retry_policy))
