import logging

from . import auth_bp
from flask import request, jsonify, g
from sqlalchemy.exc import IntegrityError
from server.smartpark.errors import NotFound, Unauthorized, ValidationError
from server.smartpark.extensions import db
from server.smartpark.models import User
from server.smartpark.utils import hash_password, check_password, generate_token, token_required

logger = logging.getLogger(__name__)

ROLES = ("admin", "staff")


@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    password = data.get('password')
    role = data.get('role') or 'staff'

    if not username or not password:
        raise ValidationError('Username and password are required')

    if role not in ROLES:
        raise ValidationError(f'Role must be one of: {", ".join(ROLES)}')

    if User.query.filter_by(username=username).first():
        raise ValidationError('Username already exists')

    # Self-registration never grants admin
    user_role = 'staff' if role == 'admin' else role

    new_user = User(username=username, password=hash_password(password), role=user_role)
    db.session.add(new_user)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ValidationError('Username already exists')

    logger.info(f"Registered user {username} ({user_role})")
    return jsonify({'message': 'User registered successfully'}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    username = data.get('username')
    password = data.get('password')

    if not username or not password:
        raise ValidationError('Please enter both username and password')

    user = User.query.filter_by(username=username).first()
    if user is None:
        raise NotFound('User not found')

    if not check_password(user.password, password):
        raise Unauthorized('Invalid password')

    return jsonify({
        'id': user.user_id,
        'username': user.username,
        'role': user.role,
        'token': generate_token(user),
    }), 200


@auth_bp.route('/profile', methods=['GET'])
@token_required
def profile():
    user = db.session.get(User, g.user_id)
    if user is None:
        raise NotFound('User not found')

    return jsonify(user.to_dict()), 200
