from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from lendtrack.services.auth_service import AuthService
from lendtrack.repositories.user_repo import UserRepo

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register", endpoint="auth_register")
def register():
    data = request.get_json(silent=True) or {}

    username = (data.get("username") or "").strip()
    email = (data.get("email") or "").strip()
    password = (data.get("password") or "").strip()
    name = (data.get("name") or "").strip()

    if not username or not email or not password:
        return jsonify({"success": False, "message": "username/email/password are required"}), 400

    try:
        user = AuthService.register(username=username, email=email, password=password, name=name)
        current_app.logger.info(f"[auth] registered user id={user.id}")
        return jsonify({"success": True, "id": user.id, "username": user.username, "name": user.name}), 201
    except ValueError as e:
        return jsonify({"success": False, "message": str(e)}), 400


@auth_bp.post("/login", endpoint="auth_login")
def login():
    data = request.get_json(silent=True) or {}
    try:
        token, user = AuthService.login(
            (data.get("username") or "").strip(),
            (data.get("password") or "").strip()
        )
        return jsonify({
            "success": True,
            "access_token": token,
            "user": {"id": user.id, "username": user.username, "name": user.name}
        })
    except ValueError as e:
        current_app.logger.warning(f"[auth] failed login for {data.get('username')!r}")
        return jsonify({"success": False, "message": str(e)}), 401


@auth_bp.get("/me", endpoint="auth_me")
@jwt_required()
def me():
    user = UserRepo.get_by_id(int(get_jwt_identity()))
    if not user:
        return jsonify({"success": False, "message": "User not found"}), 404

    return jsonify({
        "success": True,
        "user": {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "name": user.name,
            "initials": user.initials,
        }
    })
