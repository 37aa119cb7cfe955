from __future__ import annotations

import logging
from dataclasses import replace

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.web import current_profile_id, json_error, login_required
from ..container import Container
from ..core.exceptions import AuthorizationError, BackendError, ValidationError
from .model import RosterMark

logger = logging.getLogger("student_attendance.attendance")


def _row_to_json(row) -> dict:
    return {
        "student_id": row.student_id,
        "roll_number": row.roll_number,
        "full_name": row.full_name,
        "status": row.status.value,
    }


def _parse_submission(data) -> tuple[object, list[RosterMark]]:
    """Validate the JSON body of a submission: {"class_id": .., "roster": [{"student_id": .., "present": bool}]}."""

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    items = data.get("roster", [])
    if not isinstance(items, list):
        raise ValidationError("roster must be a list")

    roster: list[RosterMark] = []
    for item in items:
        if not isinstance(item, dict) or "student_id" not in item:
            raise ValidationError("Each roster entry needs a student_id")
        if not isinstance(item.get("present"), bool):
            raise ValidationError("present must be true or false")
        roster.append(RosterMark(student_id=item["student_id"], present=item["present"]))
    return data.get("class_id"), roster


def _result_to_json(result) -> dict:
    return {
        "session_id": result.session_id,
        "session_date": result.session_date.strftime("%Y-%m-%d"),
        "created": result.created,
        "total": result.total,
        "present": result.present,
        "absent": result.absent,
    }


def register(app: Flask, container: Container) -> None:
    def _selected_class_id(classes, raw) -> int | None:
        if raw:
            try:
                return int(raw)
            except ValueError:
                return None
        return classes[0].class_id if classes else None

    def _render_mark_page(raw_class_id, posted: dict[str, bool] | None = None):
        classes, roster = [], []
        selected = None
        try:
            classes = container.directory_service.list_classes()
            selected = _selected_class_id(classes, raw_class_id)
            if selected:
                roster = container.directory_service.load_roster(selected)
            if posted:
                # keep the flags of a rejected submission so it can be retried
                roster = [replace(r, present=posted.get(str(r.student_id), r.present)) for r in roster]
        except ValidationError as e:
            flash(str(e), "warning")
        except BackendError as e:
            flash(f"Error loading students: {e}", "danger")

        return render_template(
            "attendance/mark.html",
            classes=classes,
            selected_class=selected,
            students=roster,
            today=today_local().strftime("%Y-%m-%d"),
            active_page="mark_attendance",
        )

    @app.route("/attendance/mark", methods=["GET"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        return _render_mark_page(request.args.get("class_id"))

    @app.route("/attendance/mark", methods=["POST"], endpoint="submit_attendance")
    @login_required
    def submit_attendance():
        class_id = request.form.get("class_id", "")
        present_ids = set(request.form.getlist("present"))
        roster = [
            RosterMark(student_id=sid, present=sid in present_ids)
            for sid in request.form.getlist("student_ids")
        ]
        posted = {m.student_id: m.present for m in roster}

        try:
            result = container.attendance_service.submit(
                class_id=class_id,
                roster=roster,
                marked_by=current_profile_id(),
            )
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "warning")
            return _render_mark_page(class_id, posted)
        except BackendError as e:
            flash(f"Error submitting attendance: {e}", "danger")
            return _render_mark_page(class_id, posted)

        flash(f"Attendance submitted: {result.present} present, {result.absent} absent.", "success")
        return redirect(url_for("mark_attendance", class_id=class_id or None))

    @app.route("/attendance/check", methods=["GET"], endpoint="check_attendance")
    @login_required
    def check_attendance():
        classes, records = [], []
        selected = None
        selected_date = request.args.get("date") or today_local().strftime("%Y-%m-%d")
        has_searched = "date" in request.args

        try:
            classes = container.directory_service.list_classes()
            selected = _selected_class_id(classes, request.args.get("class_id"))
            if has_searched:
                if not selected:
                    raise ValidationError("Please select a class")
                records = container.attendance_service.query(
                    class_id=selected,
                    session_date=parse_iso_date(selected_date),
                )
        except ValidationError as e:
            flash(str(e), "warning")
        except BackendError as e:
            flash(f"Error fetching attendance: {e}", "danger")

        return render_template(
            "attendance/check.html",
            classes=classes,
            selected_class=selected,
            selected_date=selected_date,
            records=records,
            has_searched=has_searched,
            active_page="check_attendance",
        )

    @app.route("/api/attendance", methods=["POST"], endpoint="api_submit_attendance")
    @login_required
    def api_submit_attendance():
        data = request.get_json(silent=True)
        try:
            class_id, roster = _parse_submission(data)
            result = container.attendance_service.submit(
                class_id=class_id,
                roster=roster,
                marked_by=current_profile_id(),
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except BackendError as e:
            return json_error(str(e), 500)

        return jsonify({"success": True, "message": "Attendance submitted", **_result_to_json(result)}), 200

    @app.route("/api/attendance", methods=["GET"], endpoint="api_query_attendance")
    @login_required
    def api_query_attendance():
        try:
            session_date = parse_iso_date(request.args.get("date") or today_local().strftime("%Y-%m-%d"))
            records = container.attendance_service.query(
                class_id=request.args.get("class_id"),
                session_date=session_date,
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except BackendError as e:
            return json_error(str(e), 500)

        return jsonify(
            {
                "success": True,
                "date": session_date.strftime("%Y-%m-%d"),
                "records": [_row_to_json(r) for r in records],
            }
        )
