from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from .extensions import db, migrate, bcrypt
import click
import logging
import os

# Setup basic logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    from clinic_records.config import get_config
    app.config.from_object(get_config(config_name))

    # Ensure production mode if FLASK_ENV is production
    if os.getenv('FLASK_ENV') == 'production':
        app.config['DEBUG'] = False
        app.config['TESTING'] = False

    # Initialize extensions first (before error handlers)
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)

    from clinic_records.utils.cors import init_cors
    init_cors(app)

    from clinic_records.middleware import setup_middleware
    setup_middleware(app)

    # Global error handlers
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'success': False,
            'error': 'Endpoint not found'
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'success': False,
            'error': 'Method not allowed'
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal Server Error: {error}", exc_info=True)
        return jsonify({
            'success': False,
            'error': 'Internal server error. Check server logs for details.'
        }), 500

    @app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return jsonify({
                'success': False,
                'error': e.description
            }), e.code
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        db.session.rollback()
        error_msg = 'Something broke!' if not app.debug else f'An error occurred: {str(e)}'
        return jsonify({
            'success': False,
            'error': error_msg
        }), 500

    # Setup file logging
    if not app.debug and not app.testing:
        from logging.handlers import RotatingFileHandler

        log_dir = app.config.get('LOG_DIR', 'logs')
        os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'app.log'),
            maxBytes=10240000,
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
        app.logger.addHandler(file_handler)
        app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
        app.logger.info('Application startup')

    @app.route('/', methods=['GET'])
    def index():
        return 'API is working', 200

    # Import models to register them with SQLAlchemy
    with app.app_context():
        from .models import Visit, User  # noqa: F401

        from .routes import auth_bp, patient_bp, health_bp
        app.register_blueprint(health_bp)
        app.register_blueprint(auth_bp)
        app.register_blueprint(patient_bp)

        # The app cannot serve anything without its database
        db.create_all()
        logger.info(f"Database ready: {db.engine.url.render_as_string(hide_password=True)}")

    register_cli(app)

    return app


def register_cli(app: Flask) -> None:
    """
    Adds small helper CLI commands:
    - flask create-db: create tables using the configured database
    - flask drop-db: drop all tables (use with caution)
    """

    @app.cli.command("create-db")
    def create_db_command():
        """Create database tables if they do not exist."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("drop-db")
    def drop_db_command():
        """Drop all database tables. This is destructive."""
        db.drop_all()
        click.echo("Database tables dropped.")
