from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import SESSION_KEY, current_user, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True)
        if payload is None:
            payload = request.form
        elif not isinstance(payload, dict):
            raise ValidationError("Login payload must be a JSON object")
        user = container.auth_service.authenticate(
            str(payload.get("username", "")),
            str(payload.get("password", "")),
        )

        session.clear()
        session.permanent = bool(payload.get("remember_me"))
        session[SESSION_KEY] = user.to_session()
        return jsonify({"success": True, "user": user.to_session()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out."})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(current_user().to_session())
