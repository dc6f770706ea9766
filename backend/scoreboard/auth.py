from flask import Blueprint, request, jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from scoreboard import db
from scoreboard.models import User

auth = Blueprint('auth', __name__)


def _credentials():
    """Return (data, email, password), or None when the body is malformed."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return None
    email = data.get('email') or ''
    password = data.get('password') or ''
    if not isinstance(email, str) or not isinstance(password, str):
        return None
    return data, email.strip().lower(), password


def _malformed():
    return jsonify({"success": False, "message": "Email and password must be strings in a JSON object"}), 400


@auth.route('/register', methods=['POST'])
def register():
    parsed = _credentials()
    if parsed is None:
        return _malformed()
    data, email, password = parsed
    display_name = data.get('displayName')
    if display_name is not None and not isinstance(display_name, str):
        return jsonify({"success": False, "message": "displayName must be a string"}), 400
    if not email or not password:
        return jsonify({"success": False, "message": "Email and password are required"}), 400

    min_length = int(current_app.config.get('MIN_PASSWORD_LENGTH', 6))
    if len(password) < min_length:
        return jsonify({"success": False, "message": f"Password must be at least {min_length} characters"}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"success": False, "message": "Email is already registered"}), 400

    new_user = User(email=email, display_name=display_name)
    new_user.set_password(password)
    db.session.add(new_user)
    db.session.commit()
    login_user(new_user)
    current_app.logger.info(f"[register] user={new_user.id}")
    return jsonify({"success": True, "user": new_user.to_dict()}), 201


@auth.route('/login', methods=['POST'])
def login():
    parsed = _credentials()
    if parsed is None:
        return _malformed()
    _, email, password = parsed
    user = User.query.filter_by(email=email).first() if email else None
    if user and password and user.check_password(password):
        login_user(user, remember=True)
        return jsonify({"success": True, "user": user.to_dict()})
    current_app.logger.warning(f"[login_failed] email={email!r}")
    return jsonify({"success": False, "message": "Invalid email or password"}), 401


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({"success": True})


@auth.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify({"success": True, "user": current_user.to_dict()})
