"""JSON error responses for the API."""
import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from taskmanager.extensions import db

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Render every error as a JSON body with a ``message`` key."""

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        return jsonify({'message': err.description}), err.code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(err):
        db.session.rollback()
        logger.exception("Database error")
        return jsonify({'message': 'Server error', 'error': str(err)}), 500
