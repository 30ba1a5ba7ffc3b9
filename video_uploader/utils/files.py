import os
import shutil

from video_uploader.models import UploadRequest, UploadSettings

VIDEO_EXTENSION = '.mp4'


def find_videos(folder, extension=VIDEO_EXTENSION):
    """List the video files directly inside ``folder``, sorted by name"""
    videos = []
    for entry in sorted(os.scandir(folder), key=lambda e: e.name):
        if entry.is_file() and entry.name.lower().endswith(extension):
            videos.append(entry.path)
    return videos


def build_upload_request(file_path, cfg, password, description=None, calculated_name=None):
    """Build the request for one file; the file name is the upload identifier"""
    filename = os.path.basename(file_path)
    name = calculated_name or os.path.splitext(filename)[0]
    return UploadRequest(
        identifier=filename,
        file_path=file_path,
        size=os.path.getsize(file_path),
        chunk_size=cfg.chunk_size(),
        description=description if description is not None else name,
        password=password,
        settings=UploadSettings.from_config(cfg),
        calculated_name=name,
    )


def move_to_finished(file_path, finished_folder):
    os.makedirs(finished_folder, exist_ok=True)
    destination = os.path.join(finished_folder, os.path.basename(file_path))
    shutil.move(file_path, destination)
    return destination
