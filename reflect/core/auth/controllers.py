"""Auth HTTP controllers (JSON API and login pages)."""

from __future__ import annotations

from flask import (
    Blueprint,
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)
from flask_jwt_extended import (
    create_access_token,
    get_jwt,
    get_jwt_identity,
    jwt_required,
    set_access_cookies,
    set_refresh_cookies,
    unset_jwt_cookies,
)
from pydantic import ValidationError

from reflect.core.auth.auth_service import (
    authenticate_user,
    issue_tokens,
    register_user,
    revoke_refresh_token,
)
from reflect.core.auth.schemas import RegisterRequest
from reflect.core.auth.security import generate_csrf_token
from reflect.core.users.schemas import LoginRequest, serialize_user
from reflect.core.users.services import get_user
from reflect.core.utils.decorators import csrf_protected
from reflect.core.utils.validation import jsonable_errors
from reflect.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)
auth_pages_bp = Blueprint("auth_pages", __name__)


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    payload = request.get_json(silent=True) or {}
    try:
        data = RegisterRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "bad_request", "details": jsonable_errors(exc)}), 400
    try:
        result = register_user(
            data,
            auto_issue_tokens=current_app.config.get("AUTO_LOGIN_ON_REGISTER", False),
        )
    except ValueError as exc:
        code = str(exc)
        if code == "email_already_exists":
            return jsonify({"ok": False, "error": code}), 400
        return jsonify({"ok": False, "error": "registration_failed"}), 400

    resp = {"ok": True, "user": serialize_user(result["user"]).model_dump()}
    if "access_token" in result:
        resp.update(
            {
                "access_token": result["access_token"],
                "refresh_token": result.get("refresh_token"),
                "csrf_token": generate_csrf_token(),
            }
        )
    return jsonify(resp), 201


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    # Ensure login is stateless even if a stale Flask session cookie is present.
    session.clear()
    payload = request.get_json(silent=True) or {}
    try:
        data = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "bad_request", "details": jsonable_errors(exc)}), 400
    user = authenticate_user(data.email, data.password)
    if not user:
        return jsonify({"ok": False, "error": "invalid_credentials"}), 401
    tokens = issue_tokens(user)
    return jsonify(
        {
            "ok": True,
            **tokens,
            "csrf_token": generate_csrf_token(),
            "user": serialize_user(user).model_dump(),
        }
    )


@auth_bp.post("/refresh")
@jwt_required(refresh=True)
@limiter.limit("30/minute")
def refresh():
    new_access = create_access_token(identity=str(get_jwt_identity()))
    return jsonify({"ok": True, "access_token": new_access})


@auth_bp.post("/logout")
@jwt_required(refresh=True)
@csrf_protected
def logout():
    jti = get_jwt().get("jti")
    if jti:
        revoke_refresh_token(jti)
    return jsonify({"ok": True})


@auth_bp.get("/me")
@jwt_required()
def me():
    user = get_user(int(get_jwt_identity()))
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "user": serialize_user(user).model_dump()})


@auth_pages_bp.get("/login")
def login_page():
    return render_template("auth/login.html")


@auth_pages_bp.post("/login")
@limiter.limit("10/minute")
@csrf_protected
def login_form():
    user = authenticate_user(request.form.get("email", ""), request.form.get("password", ""))
    if not user:
        flash("Invalid email or password", "danger")
        return render_template("auth/login.html"), 401
    tokens = issue_tokens(user)
    resp = redirect(url_for("dashboard_pages.dashboard"))
    set_access_cookies(resp, tokens["access_token"])
    set_refresh_cookies(resp, tokens["refresh_token"])
    return resp


@auth_pages_bp.post("/logout")
@jwt_required(optional=True, refresh=True, locations=["cookies"])
@csrf_protected
def logout_form():
    jti = (get_jwt() or {}).get("jti")
    if jti:
        revoke_refresh_token(jti)
    resp = redirect(url_for("auth_pages.login_page"))
    unset_jwt_cookies(resp)
    session.clear()
    return resp
