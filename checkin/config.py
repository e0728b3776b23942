import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration class with all settings as static attributes."""

    # Core configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'your-secret-key-here'
    DEBUG = os.environ.get('FLASK_DEBUG', 'false').lower() == 'true'
    VERSION = '1.0.0'

    # Directory configuration
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    LOG_DIR = os.environ.get('LOG_DIR') or os.path.join(BASE_DIR, 'logs')
    ENABLE_FILE_LOGGING = os.environ.get('ENABLE_FILE_LOGGING', 'true').lower() == 'true'

    # Database configuration (backs the 'database' blob store)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///checkin.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Persistence: 'database', 'file' or 'memory'
    BLOB_STORE = os.environ.get('BLOB_STORE', 'database')
    BLOB_STORE_DIR = os.environ.get('BLOB_STORE_DIR') or os.path.join(BASE_DIR, 'data')
    USERS_KEY = 'users'
    ACCESS_LOG_KEY = 'access-log'

    # Access log retention (most recent entries kept)
    ACCESS_LOG_RETENTION = int(os.environ.get('ACCESS_LOG_RETENTION', 500))

    # Code generation
    CODE_PREFIX = os.environ.get('CODE_PREFIX', 'ACC')
    CODE_MAX_ATTEMPTS = 25

    # Scanner settings
    SIMULATE_SCAN_LIMIT = 4

    # Install the two demo people when no directory has been stored yet
    SEED_DEMO_PEOPLE = os.environ.get('SEED_DEMO_PEOPLE', 'true').lower() == 'true'

    # File upload configuration
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB
    ALLOWED_EXTENSIONS = {'csv', 'xlsx', 'xls'}  # For data imports

    @staticmethod
    def allowed_file(filename):
        """Check if file extension is allowed for imports."""
        if not filename or '.' not in filename:
            return False

        ext = filename.rsplit('.', 1)[1].lower()
        return ext in Config.ALLOWED_EXTENSIONS


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    SQLALCHEMY_ECHO = os.environ.get('SQL_DEBUG', 'false').lower() == 'true'


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False

    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Error logs also go to syslog when set, e.g. "/dev/log" or "logs.example.com:514"
    SYSLOG_SERVER = os.environ.get('SYSLOG_SERVER')

    @staticmethod
    def syslog_address(value):
        """Turn SYSLOG_SERVER into a SysLogHandler address."""
        if not value:
            return None
        host, sep, port = value.rpartition(':')
        if sep and host and port.isdigit():
            return host, int(port)
        return value


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    WTF_CSRF_ENABLED = False

    # Override for testing
    BLOB_STORE = 'memory'
    SEED_DEMO_PEOPLE = False
    ENABLE_FILE_LOGGING = False
    ACCESS_LOG_RETENTION = 500


# Configuration dictionary
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}


# Helper function to get current configuration
def get_config():
    """Get current configuration instance."""
    config_name = os.environ.get('FLASK_CONFIG', 'development')
    return config_by_name[config_name]()
