# __init__.py
"""
Application factory for the check-in system.
This module creates and configures the Flask application using the application factory pattern.
"""

import os
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify
from flask_wtf.csrf import generate_csrf
from dotenv import load_dotenv

from checkin.config import config_by_name
from checkin.errors import CheckInError
from checkin.extensions import init_extensions, csrf, get_state


def setup_logging(app):
    """
    Configure structured logging for the application.

    Args:
        app: Flask application instance
    """
    log_format = logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s %(threadName)s : %(message)s'
    )
    level = logging.DEBUG if app.debug else logging.INFO

    handlers = []

    if app.config.get('ENABLE_FILE_LOGGING', True):
        log_dir = app.config.get('LOG_DIR') or os.path.join(app.root_path, 'logs')
        os.makedirs(log_dir, exist_ok=True)

        # File handler with rotation
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'app.log'),
            maxBytes=1024 * 1024 * 10,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(log_format)
        file_handler.setLevel(logging.INFO)
        file_handler.set_name('checkin_file')
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name('checkin_console')
    console_handler.setFormatter(log_format)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    # Service loggers share the application handlers. Loggers are process-wide,
    # so handlers are only attached the first time an app is created.
    for name in (app.logger.name, 'directory_store', 'access_log', 'check_in_service', 'check_in',
                 'importer', 'people', 'history', 'scanner', 'blob_store', 'qr_code_service'):
        service_logger = logging.getLogger(name)
        service_logger.setLevel(level)
        attached = {h.get_name() for h in service_logger.handlers}
        for handler in handlers:
            if handler.get_name() not in attached:
                service_logger.addHandler(handler)

    # Forcefully suppress SQLAlchemy logs
    sa_logger = logging.getLogger('sqlalchemy.engine')
    sa_logger.setLevel(logging.WARNING)
    sa_logger.propagate = False


def register_blueprints(app):
    """
    Register all application blueprints.

    Args:
        app: Flask application instance
    """
    try:
        # Import blueprints here to avoid circular imports
        from .controllers.people import people_bp
        from .controllers.check_in import check_in_bp
        from .controllers.history import history_bp

        # Scanner devices post JSON without a browser session
        csrf.exempt(check_in_bp)

        app.register_blueprint(people_bp, url_prefix='/people')
        app.register_blueprint(check_in_bp, url_prefix='/check-in')
        app.register_blueprint(history_bp, url_prefix='/history')

        app.logger.info("All blueprints registered successfully")

    except ImportError as e:
        app.logger.error(f"Failed to import blueprint: {str(e)}")
        raise


def register_error_handlers(app):
    """
    Register global error handlers.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(CheckInError)
    def handle_check_in_error(e):
        app.logger.warning(f"{e.error_code}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def handle_404(e):
        return jsonify({'success': False, 'error': 'Resource not found'}), 404

    @app.errorhandler(405)
    def handle_405(e):
        return jsonify({'success': False, 'error': 'Method not allowed'}), 405

    @app.errorhandler(413)
    def handle_413(e):
        return jsonify({'success': False, 'error': 'File too large'}), 413

    @app.errorhandler(500)
    def handle_500(e):
        app.logger.error(f"Internal server error: {str(e)}")
        return jsonify({'success': False, 'error': 'Internal server error'}), 500


def register_health_checks(app):
    """
    Register health check endpoints.

    Args:
        app: Flask application instance
    """

    @app.route('/health')
    def health_check():
        """Basic health check endpoint."""
        state = get_state()
        return jsonify({
            'status': 'ok',
            'timestamp': datetime.now().isoformat(),
            'version': app.config.get('VERSION', '1.0.0'),
            'store': app.config.get('BLOB_STORE'),
            'people': len(state.directory),
            'log_entries': len(state.access_log)
        })

    @app.route('/csrf-token')
    def csrf_token():
        """Token for clients posting to CSRF-protected routes."""
        return jsonify({'csrf_token': generate_csrf()})


def register_shell_context(app):
    """
    Register shell context for flask shell command.

    Args:
        app: Flask application instance
    """

    @app.shell_context_processor
    def make_shell_context():
        state = get_state(app)
        return {
            'directory': state.directory,
            'access_log': state.access_log,
            'check_in_service': state.check_in_service
        }


def create_app(config_name=None, blob_store=None):
    """
    Application factory function.

    Args:
        config_name (str): Configuration name ('development', 'production', 'testing')
        blob_store: Optional BlobStore overriding the configured backend

    Returns:
        Flask: Configured Flask application instance
    """
    # Load environment variables
    load_dotenv()

    app = Flask(__name__)

    config_name = config_name or os.environ.get('FLASK_ENV', 'development')
    app.config.from_object(config_by_name[config_name])

    # Setup logging first
    setup_logging(app)
    app.logger.info(f"Starting application with config: {config_name}")

    init_extensions(app, blob_store=blob_store)

    register_blueprints(app)
    register_error_handlers(app)
    register_shell_context(app)
    register_health_checks(app)

    # Register CLI commands
    from .cli import register_cli_commands
    register_cli_commands(app)

    app.logger.info("Application factory completed successfully")

    return app
