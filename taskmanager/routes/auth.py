"""Authentication routes and decorators."""
import logging
import os
import re
import time
from functools import wraps

from flask import Blueprint, request, jsonify, abort, g, current_app, url_for
from flask_jwt_extended import create_access_token, get_current_user, verify_jwt_in_request
from werkzeug.security import generate_password_hash, check_password_hash
from werkzeug.utils import secure_filename

from taskmanager.extensions import jwt
from taskmanager.models import db, User

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

INVALID_LOGIN = 'Invalid email or password'


def is_valid_email(email):
    regex = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'
    return re.search(regex, email)


def generate_token(user):
    return create_access_token(identity=str(user.id))


def auth_response(user, status=200):
    body = user.to_dict()
    body['token'] = generate_token(user)
    return jsonify(body), status


def request_data():
    """The request's JSON object; a body of any other JSON type is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        abort(400, description='Request body must be a JSON object')
    return data


# ==================== Token callbacks ====================

@jwt.user_lookup_loader
def load_token_user(_jwt_header, jwt_data):
    try:
        user_id = int(jwt_data['sub'])
    except (KeyError, TypeError, ValueError):
        return None
    return db.session.get(User, user_id)


@jwt.unauthorized_loader
def missing_token(reason):
    logger.warning("Missing bearer token: %s", reason)
    return jsonify({'message': 'Not authorized, no token'}), 401


@jwt.invalid_token_loader
def invalid_token(reason):
    logger.warning("Rejected bearer token: %s", reason)
    return jsonify({'message': 'Token failed'}), 401


@jwt.expired_token_loader
def expired_token(_jwt_header, _jwt_payload):
    return jsonify({'message': 'Token expired'}), 401


@jwt.user_lookup_error_loader
def unknown_token_user(_jwt_header, _jwt_payload):
    return jsonify({'message': 'User not found'}), 401


# ==================== RBAC Decorators (MUST be defined before routes that use them) ====================

def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        g.user = get_current_user()
        return f(*args, **kwargs)
    return decorated_function


def role_required(roles):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = g.get('user')
            if user is None:
                abort(401, description='Not authorized, no token')
            if user.role not in roles:
                abort(403, description='Access denied, admins only')
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(f):
    return role_required(['admin'])(f)


# ==================== Routes ====================

@auth_bp.route('/register', methods=['POST'])
def register():
    data = request_data()
    name = (data.get('name') or '').strip()
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''
    profile_image_url = data.get('profileImageUrl')
    admin_invite_token = data.get('adminInviteToken')

    if not name or not email or not password:
        abort(400, description='Name, email and password are required')
    if not is_valid_email(email):
        abort(400, description='Invalid email')
    if User.query.filter_by(email=email).first() is not None:
        abort(400, description='User already exists')

    role = 'member'
    invite = current_app.config.get('ADMIN_INVITE_TOKEN')
    if admin_invite_token and invite and admin_invite_token == invite:
        role = 'admin'

    user = User(
        name=name,
        email=email,
        password_hash=generate_password_hash(password),
        profile_image_url=profile_image_url,
        role=role
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s with role %s", user.id, role)
    return auth_response(user, 201)


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request_data()
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    user = User.query.filter_by(email=email).first()
    if user is None or not check_password_hash(user.password_hash, password):
        logger.warning("Failed login for %s", email)
        abort(401, description=INVALID_LOGIN)

    return auth_response(user)


@auth_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    return jsonify(g.user.to_dict())


@auth_bp.route('/profile', methods=['PUT'])
@login_required
def update_profile():
    user = g.user
    data = request_data()

    user.name = data.get('name') or user.name

    email = (data.get('email') or '').strip().lower()
    if email and email != user.email:
        if not is_valid_email(email):
            abort(400, description='Invalid email')
        if User.query.filter(User.email == email, User.id != user.id).first() is not None:
            abort(400, description='Email already in use')
        user.email = email

    if data.get('profileImageUrl'):
        user.profile_image_url = data['profileImageUrl']

    # Update password if provided
    if data.get('password'):
        user.password_hash = generate_password_hash(data['password'])

    db.session.commit()
    return auth_response(user)


@auth_bp.route('/upload-image', methods=['POST'])
def upload_image():
    file = request.files.get('image')
    if not file or not file.filename:
        abort(400, description='No file uploaded')

    filename = secure_filename(file.filename)
    extension = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    if extension not in current_app.config['ALLOWED_IMAGE_EXTENSIONS']:
        abort(400, description='Only .jpeg, .jpg and .png formats are allowed')

    upload_dir = current_app.config['UPLOAD_FOLDER']
    os.makedirs(upload_dir, exist_ok=True)
    stored_name = f"{int(time.time() * 1000)}-{filename}"
    file.save(os.path.join(upload_dir, stored_name))

    image_url = url_for('main.uploaded_file', filename=stored_name, _external=True)
    return jsonify({'imageUrl': image_url})
