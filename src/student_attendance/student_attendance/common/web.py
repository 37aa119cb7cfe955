from __future__ import annotations

from functools import wraps

from flask import flash, jsonify, redirect, render_template, request, session, url_for

from ..core.enums import Role


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def render_forbidden():
    current_user = {"full_name": session.get("name"), "role": session.get("role")}
    return render_template("403.html", current_user=current_user), 403


def current_profile_id() -> int:
    return int(session["profile_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "profile_id" not in session:
            if _wants_json():
                return json_error("Authentication required", 401)
            flash("Please sign in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "profile_id" not in session:
            if _wants_json():
                return json_error("Authentication required", 401)
            return redirect(url_for("login"))

        if session.get("role") != Role.ADMIN.value:
            if _wants_json():
                return json_error("Forbidden", 403)
            return render_forbidden()

        return view(*args, **kwargs)

    return wrapper
