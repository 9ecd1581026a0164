"""
BHUB - Municipal e-government portal API
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import login_manager, csrf, cors

# Import database functions
from database import close_db, init_db, bootstrap_db, get_db


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)

    # Load configuration
    config_class = config[config_name]
    app.config.from_object(config_class)
    if hasattr(config_class, 'validate'):
        config_class.validate()

    initialize_extensions(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_cli_commands(app)
    register_teardown_handlers(app)
    configure_logging(app)

    # Make sure the schema and default admin accounts exist
    if not app.config.get('TESTING'):
        with app.app_context():
            bootstrap_db()

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    login_manager.init_app(app)
    csrf.init_app(app)
    cors.init_app(
        app,
        origins=[app.config['FRONTEND_URL']],
        supports_credentials=True,
        allow_headers=['Content-Type', 'X-CSRFToken', 'X-Requested-With']
    )


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.auth.routes import auth_bp
    from blueprints.admin.routes import admin_bp
    from blueprints.court import court_bp
    from blueprints.api.routes import api_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(court_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/')
    def index():
        """Service banner."""
        from utils.api_response import api_success
        return api_success(data={
            'service': app.config.get('APP_NAME', 'BHUB'),
            'version': app.config.get('APP_VERSION', '1.0.0')
        })


def register_error_handlers(app):
    """Register error handlers."""
    from flask_wtf.csrf import CSRFError
    from utils.api_response import api_error
    from utils.errors import PortalError
    from utils.messages import MESSAGES

    @app.errorhandler(PortalError)
    def portal_error(error):
        """Map domain errors onto their HTTP status."""
        if error.status_code >= 500:
            app.logger.error(f'{type(error).__name__}: {error.message}', exc_info=error)
        return api_error(error.message, status=error.status_code)

    @app.errorhandler(CSRFError)
    def csrf_error(error):
        """Handle missing or expired CSRF tokens."""
        return api_error(error.description, status=400)

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(MESSAGES['not_found'], status=404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 errors."""
        return api_error('Method not allowed', status=405)

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        return api_error(MESSAGES['server_error'], status=500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and default admins."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('bootstrap-admins')
    def bootstrap_admins_command():
        """Create the default admin accounts if they are missing."""
        from database.seed import bootstrap_default_admins

        with app.app_context():
            created = bootstrap_default_admins(get_db())
        click.echo(f"Created: {', '.join(created)}" if created else 'Default admins already exist')

    @app.cli.command('create-user')
    @click.argument('email')
    @click.argument('user_type', type=click.Choice(['resident', 'admin', 'superadmin']))
    @click.option('--first-name', default='New')
    @click.option('--last-name', default='User')
    @click.password_option()
    def create_user_command(email, user_type, first_name, last_name, password):
        """Create a new user."""
        from models.user import create_user

        with app.app_context():
            try:
                user_id = create_user(
                    first_name=first_name,
                    last_name=last_name,
                    email=email,
                    password=password,
                    user_type=user_type
                )
                click.echo(f'User created successfully! ID: {user_id}')
            except ValueError as e:
                click.echo(f'Error creating user: {str(e)}', err=True)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        )
        file_handler = logging.FileHandler('logs/bhub.log')
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(logging.INFO)

        # Module loggers (models.*, utils.*) share the same file
        root_logger = logging.getLogger()
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.INFO)

        app.logger.info('BHUB startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 3002)), debug=True)
