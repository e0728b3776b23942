# extensions.py
"""
Flask extensions initialization.
This file initializes all Flask extensions to avoid circular imports.
Extensions are initialized here and then bound to the app in the application factory.
"""

import logging

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_wtf.csrf import CSRFProtect
from sqlalchemy import text

# Initialize extensions without app binding
db = SQLAlchemy()
migrate = Migrate()
csrf = CSRFProtect()

logger = logging.getLogger(__name__)

EXTENSION_NAME = 'checkin'


class CheckInState:
    """The stores owned by one application instance."""

    def __init__(self, blob_store, directory, access_log, check_in_service):
        self.blob_store = blob_store
        self.directory = directory
        self.access_log = access_log
        self.check_in_service = check_in_service


def create_blob_store(app):
    """
    Build the blob store selected by BLOB_STORE.

    Args:
        app: Flask application instance

    Returns:
        BlobStore: store implementation for the configured backend
    """
    from checkin.services.blob_store import DatabaseBlobStore, JsonFileBlobStore, MemoryBlobStore

    backend = app.config.get('BLOB_STORE', 'database')
    if backend == 'memory':
        return MemoryBlobStore()
    if backend == 'file':
        return JsonFileBlobStore(app.config['BLOB_STORE_DIR'])
    if backend == 'database':
        return DatabaseBlobStore()

    raise ValueError(f"Unknown BLOB_STORE backend: {backend}")


def init_check_in_state(app, blob_store=None):
    """
    Load the directory and access log from the blob store and attach them to the app.

    Args:
        app: Flask application instance
        blob_store: optional store overriding the configured backend
    """
    from checkin.services.access_log import AccessLog
    from checkin.services.check_in_service import CheckInService
    from checkin.services.directory import DirectoryStore

    blob_store = blob_store or create_blob_store(app)

    with app.app_context():
        if app.config.get('BLOB_STORE') == 'database':
            db.create_all()

        directory = DirectoryStore(
            blob_store,
            key=app.config.get('USERS_KEY', 'users'),
            prefix=app.config.get('CODE_PREFIX', 'ACC'),
            max_attempts=app.config.get('CODE_MAX_ATTEMPTS', 25)
        )
        seeded = directory.load(seed_demo=app.config.get('SEED_DEMO_PEOPLE', False))
        if seeded:
            app.logger.info("Directory was empty; demo people installed")

        access_log = AccessLog(
            blob_store,
            key=app.config.get('ACCESS_LOG_KEY', 'access-log'),
            retention=app.config.get('ACCESS_LOG_RETENTION', 500)
        )
        access_log.load()

    state = CheckInState(
        blob_store=blob_store,
        directory=directory,
        access_log=access_log,
        check_in_service=CheckInService(directory, access_log)
    )
    app.extensions[EXTENSION_NAME] = state

    app.logger.info(f"Check-in state loaded: {len(directory)} people, "
                    f"{len(access_log)} log entries ({app.config.get('BLOB_STORE')} store)")
    return state


def get_state(app=None):
    """Return the CheckInState of the given (or current) application."""
    app = app or current_app
    return app.extensions[EXTENSION_NAME]


def check_database_health():
    """
    Check if the database connection is healthy.
    This function requires an active Flask application context.

    Returns:
        tuple: (bool, str) indicating health status and message
    """
    try:
        connection = db.engine.connect()
        try:
            with connection.begin():
                result = connection.execute(text("SELECT 1"))
                result.fetchone()

            return True, "Database connection is healthy"
        finally:
            connection.close()

    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False, f"Database connection failed: {str(e)}"


def init_extensions(app, blob_store=None):
    """
    Initialize all extensions with proper order and configuration.

    Args:
        app: Flask application instance
        blob_store: optional blob store injected by tests or embedding code
    """
    # Step 1: Initialize database first (backs the database blob store)
    db.init_app(app)
    migrate.init_app(app, db)

    # Step 2: Initialize CSRF protection for browser form posts
    csrf.init_app(app)

    # Step 3: Load stores
    init_check_in_state(app, blob_store=blob_store)

    app.logger.info("Extensions initialized successfully in correct order")
