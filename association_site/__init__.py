"""
Student Association Website - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from association_site.config import Config
from association_site.extensions import db, login_manager
from association_site.services.blob import BlobStore
from association_site.services.mailer import Mailer

logger = logging.getLogger(__name__)


def create_app(config_class=Config, blob_store=None, mailer=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        blob_store: Blob storage client; built from config when omitted
        mailer: Mail client; built from config when omitted

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Collaborators are built once and reused for the app's lifetime
    app.extensions['blob_store'] = blob_store or BlobStore.from_config(app.config)
    app.extensions['mailer'] = mailer or Mailer.from_config(app.config)

    # Register blueprints
    from association_site.auth import auth_bp
    from association_site.admin import admin_bp
    from association_site.public import public_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(admin_bp, url_prefix='/admin/api')
    app.register_blueprint(public_bp, url_prefix='/api')

    # Session cookie -> User for Flask-Login
    @login_manager.request_loader
    def load_user_from_request(req):
        from association_site.auth.sessions import resolve_session, session_cookie_name
        return resolve_session(req.cookies.get(session_cookie_name()))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'ok': False, 'error': 'Unauthorized'}), 401

    _register_error_handlers(app)

    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and not app.testing:
            os.makedirs(os.path.join(app.root_path, os.pardir, 'instance'), exist_ok=True)
        from association_site import models  # noqa: F401
        db.create_all()

    return app


def _register_error_handlers(app):
    """JSON bodies for every error; internal detail stays in the log."""

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'ok': False, 'error': e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        logger.exception('Unhandled error on %s %s', request.method, request.path)
        return jsonify({'ok': False, 'error': 'Internal server error'}), 500
