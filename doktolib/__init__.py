from flask import Flask
from .extensions import db, migrate
import click
import logging
import os

# Setup basic logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config_name=None, object_store=None):
    """
    Create Flask application factory

    object_store replaces the S3 gateway built from configuration (tests
    inject an in-memory store here).
    """
    app = Flask(__name__)

    # Load configuration
    if config_name:
        from doktolib.config import config
        app.config.from_object(config.get(config_name, config['default']))
    else:
        from doktolib.config import get_config
        app.config.from_object(get_config())

    # Ensure production mode if FLASK_ENV is production
    if os.getenv('FLASK_ENV') == 'production':
        app.config['DEBUG'] = False
        app.config['TESTING'] = False

    from doktolib.config import mask_password
    logger.info("Connecting to database with URL: %s", mask_password(app.config['SQLALCHEMY_DATABASE_URI']))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Object store gateway, shared by all requests
    if object_store is None:
        from doktolib.services.object_store import ObjectStore
        object_store = ObjectStore.from_config(app.config)
    app.extensions['object_store'] = object_store

    # Initialize CORS
    from doktolib.utils.cors import init_cors
    init_cors(app)

    from doktolib.errors import register_error_handlers
    register_error_handlers(app)

    from doktolib.middleware import setup_middleware
    setup_middleware(app)

    # Setup file logging
    if not app.debug and not app.testing:
        from logging.handlers import RotatingFileHandler

        log_file = app.config['LOG_FILE']
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10240000,
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))
        app.logger.info('Application startup')

    # Import models to register them with SQLAlchemy
    with app.app_context():
        from . import models  # noqa: F401

    # Register blueprints
    from .routes import health_bp, doctor_bp, appointment_bp, prescription_bp, medical_file_bp
    app.register_blueprint(health_bp)  # Register health check first
    app.register_blueprint(doctor_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(prescription_bp)
    app.register_blueprint(medical_file_bp)

    register_cli(app)

    return app


def register_cli(app: Flask) -> None:
    """
    Adds small helper CLI commands:
    - flask create-db: create tables using the configured database
    - flask seed-doctors: insert generated doctors
    - flask seed-appointments: insert generated appointments and prescriptions
    """

    @app.cli.command("create-db")
    def create_db_command():
        """Create database tables if they do not exist."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("seed-doctors")
    @click.option("--count", default=1500, show_default=True, help="Number of doctors to generate.")
    @click.option("--seed", type=int, default=None, help="Random seed for reproducible data.")
    def seed_doctors_command(count, seed):
        """Insert randomly generated doctors."""
        from doktolib.seeds import seed_doctors
        inserted = seed_doctors(count=count, seed=seed)
        click.echo(f"Inserted {inserted} doctors.")

    @app.cli.command("seed-appointments")
    @click.option("--count", default=200, show_default=True, help="Number of appointments to generate.")
    @click.option("--seed", type=int, default=None, help="Random seed for reproducible data.")
    def seed_appointments_command(count, seed):
        """Insert randomly generated appointments across existing doctors."""
        from doktolib.seeds import seed_appointments
        appointments, prescriptions = seed_appointments(count=count, seed=seed)
        click.echo(f"Inserted {appointments} appointments and {prescriptions} prescriptions.")
