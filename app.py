# app.py
"""
Main application entry point.
This module creates the Flask application instance and handles application startup.
"""

import os

from checkin import create_app


def create_application():
    """
    Create and configure the Flask application.

    Returns:
        Flask: Configured application instance
    """
    # Get configuration from environment
    config_name = os.environ.get('FLASK_ENV', 'development')

    app = create_app(config_name)

    if config_name == 'production':
        setup_production_features(app)

    return app


def setup_production_features(app):
    """
    Setup production-specific features.

    Args:
        app: Flask application instance
    """
    import logging
    from logging.handlers import SysLogHandler

    from checkin.config import ProductionConfig

    address = ProductionConfig.syslog_address(app.config.get('SYSLOG_SERVER'))
    if address:
        syslog_handler = SysLogHandler(address=address)
        syslog_handler.setLevel(logging.ERROR)
        app.logger.addHandler(syslog_handler)

    if app.config.get('BLOB_STORE') == 'file':
        os.makedirs(app.config['BLOB_STORE_DIR'], exist_ok=True)

    app.logger.info("Production features configured")


# Create the application instance
app = create_application()


# Development server configuration
if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_ENV') == 'development'

    app.logger.info(f"Starting development server on port {port}, debug={debug}")

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug,
        threaded=True
    )
