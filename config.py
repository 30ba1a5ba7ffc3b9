import os

from dotenv import load_dotenv
load_dotenv()

# Chunk sizes are configured in decimal megabytes.
MEGABYTE = 1000 * 1000


class Config:
    """Base configuration class"""
    VIMEO_ACCESS_TOKEN = os.getenv('VIMEO_ACCESS_TOKEN', '')
    VIMEO_API_URL = os.getenv('VIMEO_API_URL', 'https://api.vimeo.com')

    # Folders
    UPLOAD_FOLDER_PATH = os.getenv('UPLOAD_FOLDER_PATH', os.path.join(os.getcwd(), 'uploads'))
    FINISHED_FOLDER_PATH = os.getenv('FINISHED_FOLDER_PATH', os.path.join(os.getcwd(), 'uploaded'))
    OUTPUT_FOLDER_PATH = os.getenv('OUTPUT_FOLDER_PATH', os.getcwd())

    # Transfer
    CHUNK_SIZE_MB = int(os.getenv('CHUNK_SIZE_MB', '100'))
    MAX_ATTEMPTS = int(os.getenv('MAX_ATTEMPTS', '2'))
    RATE_LIMIT_COOLDOWN_SECONDS = float(os.getenv('RATE_LIMIT_COOLDOWN_SECONDS', '60'))
    API_TIMEOUT = float(os.getenv('API_TIMEOUT', '30'))
    UPLOAD_TIMEOUT = float(os.getenv('UPLOAD_TIMEOUT', '300'))

    # Video settings applied to every new upload
    PRIVACY_COMMENTS = os.getenv('PRIVACY_COMMENTS', 'nobody')
    PRIVACY_EMBED = os.getenv('PRIVACY_EMBED', 'public')
    PRIVACY_VIEW = os.getenv('PRIVACY_VIEW', 'password')
    PRIVACY_DOWNLOAD = os.getenv('PRIVACY_DOWNLOAD', 'false').lower() == 'true'
    CONTENT_RATING = [r.strip() for r in os.getenv('CONTENT_RATING', 'safe').split(',') if r.strip()]

    # Class schedule used to name recordings, e.g.
    # CLASS_SCHEDULE="Advanced Tap,Monday,18:30;Beginner Jazz,Wednesday,17:00"
    SEMESTER_START_DATE = os.getenv('SEMESTER_START_DATE', '')
    CLASS_SCHEDULE = os.getenv('CLASS_SCHEDULE', '')

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def chunk_size(cls):
        return cls.CHUNK_SIZE_MB * MEGABYTE


class DevelopmentConfig(Config):
    """Development configuration"""
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    """Testing configuration"""
    VIMEO_ACCESS_TOKEN = 'test-token'
    VIMEO_API_URL = 'https://api.vimeo.test'
    RATE_LIMIT_COOLDOWN_SECONDS = 0
    API_TIMEOUT = 5
    UPLOAD_TIMEOUT = 5
    SEMESTER_START_DATE = ''
    CLASS_SCHEDULE = ''


class ProductionConfig(Config):
    """Production configuration"""
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': ProductionConfig
}
