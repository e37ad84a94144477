"""Routes package - Blueprint registration."""
from taskmanager.routes.main import main_bp
from taskmanager.routes.auth import auth_bp
from taskmanager.routes.tasks import tasks_bp
from taskmanager.routes.users import users_bp
from taskmanager.routes.reports import reports_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(tasks_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(reports_bp)
