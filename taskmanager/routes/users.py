"""User directory routes."""
from flask import Blueprint, jsonify

from taskmanager.models import db, User
from taskmanager.routes.auth import login_required, admin_required
from taskmanager.services.dashboard import user_task_counts

users_bp = Blueprint('users', __name__, url_prefix='/api/users')


@users_bp.route('/', strict_slashes=False)
@login_required
@admin_required
def users_list():
    """List members with their task counts."""
    users = User.query.filter_by(role='member').order_by(User.name).all()
    result = []
    for user in users:
        item = user.to_dict()
        item.update(user_task_counts(user))
        result.append(item)
    return jsonify(result)


@users_bp.route('/<int:user_id>')
@login_required
def user_detail(user_id):
    user = db.get_or_404(User, user_id, description='User not found')
    return jsonify(user.to_dict())
