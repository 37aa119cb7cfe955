from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.web import admin_required, current_profile_id, json_error, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, BackendError, ValidationError

logger = logging.getLogger("student_attendance.directory")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="api_classes")
    @login_required
    def api_classes():
        try:
            classes = container.directory_service.list_classes()
        except BackendError as e:
            return json_error(str(e), 500)
        return jsonify({"success": True, "classes": [asdict(c) for c in classes]})

    @app.route("/api/classes/<int:class_id>/roster", methods=["GET"], endpoint="api_class_roster")
    @login_required
    def api_class_roster(class_id: int):
        try:
            roster = container.directory_service.load_roster(class_id)
        except ValidationError as e:
            return json_error(str(e), 400)
        except BackendError as e:
            return json_error(str(e), 500)
        return jsonify({"success": True, "class_id": class_id, "students": [asdict(r) for r in roster]})

    @app.route("/admin/enrollments", methods=["GET", "POST"], endpoint="admin_enrollments")
    @admin_required
    def admin_enrollments():
        if request.method == "POST":
            try:
                # user_roles is authoritative; the role cached in the session can be stale
                is_admin = container.auth_service.has_role(current_profile_id(), Role.ADMIN)
                container.directory_service.enroll(
                    current_role=Role.ADMIN if is_admin else Role.TEACHER,
                    student_id=request.form.get("student_id"),
                    class_id=request.form.get("class_id"),
                )
                flash("Student enrolled.", "success")
                return redirect(url_for("admin_enrollments"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "warning")
            except BackendError as e:
                flash(f"Error enrolling student: {e}", "danger")

        try:
            classes = container.directory_service.list_classes()
        except BackendError as e:
            flash(f"Error loading classes: {e}", "danger")
            classes = []
        return render_template("admin/enrollments.html", classes=classes, active_page="admin_enrollments")
