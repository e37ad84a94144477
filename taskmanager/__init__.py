"""
Task Manager API - Application Factory
"""
import logging
import os

import click
from flask import Flask
from dotenv import load_dotenv
from werkzeug.security import generate_password_hash

from taskmanager.extensions import db, jwt, cors
from taskmanager.errors import register_error_handlers
from taskmanager.routes import register_blueprints
from taskmanager.settings import config


def configure_logging(app):
    """Set the root log level from the app config."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )
    logging.getLogger().setLevel(level)


def create_app(config_name=None):
    """Application Factory."""
    load_dotenv()

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    jwt.init_app(app)
    cors.init_app(
        app,
        resources={r'/api/*': {'origins': app.config['CLIENT_URL']}},
        methods=['GET', 'POST', 'PUT', 'DELETE'],
        allow_headers=['Content-Type', 'Authorization'],
    )

    register_error_handlers(app)
    register_blueprints(app)
    register_cli_commands(app)

    app.logger.info("Task Manager API initialised (%s)", config_name)
    return app


def register_cli_commands(app):
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db_command():
        """Creates database tables."""
        db.create_all()
        click.echo("Initialized the database.")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("name")
    @click.password_option()
    def create_admin_command(email, name, password):
        """Creates an admin account."""
        from taskmanager.models import User

        if User.query.filter_by(email=email).first() is not None:
            raise click.ClickException(f"User {email} already exists.")

        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role='admin',
        )
        db.session.add(user)
        db.session.commit()
        click.echo(f"Admin {email} created.")
