"""Main routes - uploaded files."""
from flask import Blueprint, current_app, send_from_directory

main_bp = Blueprint('main', __name__)


@main_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
