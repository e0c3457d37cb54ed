from flask import Blueprint, request, jsonify
from flask_jwt_extended import create_access_token

from shiftboard.models.user import User
from shiftboard.utils.auth import login_required

auth_bp = Blueprint('auth_bp', __name__)

@auth_bp.route('/auth/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password') or ''

    if not email or not password:
        return jsonify({'error': 'Email and password are required'}), 400

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        return jsonify({'error': 'Invalid credentials'}), 401

    access_token = create_access_token(
        identity=str(user.id),
        additional_claims=user.get_jwt_claims()
    )

    return jsonify({
        'access_token': access_token,
        'user': user.to_dict()
    })

@auth_bp.route('/auth/me', methods=['GET'])
@login_required()
def get_me(user):
    return jsonify(user.to_dict())
