from .tasks import upload_videos_task
