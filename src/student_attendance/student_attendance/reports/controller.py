from __future__ import annotations

import csv
import io
from datetime import timedelta

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import parse_iso_date, parse_optional_date, today_local
from ..common.web import json_error, login_required
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import BackendError, ValidationError
from .service import CLASS_REPORT_CSV_FIELDS


def register(app: Flask, container: Container) -> None:
    @app.route("/reports", methods=["GET"], endpoint="reports")
    @login_required
    def reports():
        today = today_local()
        start_s = request.args.get("start") or (today - timedelta(days=DEFAULT_REPORT_DAYS)).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")

        data = None
        try:
            data = container.report_service.build_overview(start=parse_iso_date(start_s), end=parse_iso_date(end_s))
        except ValidationError as e:
            flash(str(e), "warning")
        except BackendError as e:
            flash(f"Error loading reports: {e}", "danger")

        return render_template(
            "reports/index.html",
            start=start_s,
            end=end_s,
            classes=data.classes if data else [],
            students=data.students if data else [],
            daily=data.daily if data else [],
            active_page="reports",
        )

    @app.route("/reports/classes.csv", methods=["GET"], endpoint="reports_classes_csv")
    @login_required
    def reports_classes_csv():
        try:
            rows = container.report_service.class_report_csv_rows()
        except BackendError as e:
            flash(f"Error exporting report: {e}", "danger")
            return redirect(url_for("reports"))

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CLASS_REPORT_CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        filename = f"class_attendance_{today_local().strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/students/<int:student_id>/percentage", methods=["GET"], endpoint="api_student_percentage")
    @login_required
    def api_student_percentage(student_id: int):
        try:
            class_id = request.args.get("class_id")
            pct = container.report_service.attendance_percentage(
                student_id=student_id,
                class_id=int(class_id) if class_id else None,
                start=parse_optional_date(request.args.get("start")),
                end=parse_optional_date(request.args.get("end")),
            )
        except ValueError:
            return json_error("class_id must be a number", 400)
        except ValidationError as e:
            return json_error(str(e), 400)
        except BackendError as e:
            return json_error(str(e), 500)

        return jsonify({"success": True, "student_id": student_id, "attendance_percentage": f"{pct:.2f}"})

    @app.route("/api/students/<int:student_id>/summary", methods=["GET"], endpoint="api_student_summary")
    @login_required
    def api_student_summary(student_id: int):
        try:
            stats = container.report_service.student_summary(student_id)
        except ValidationError as e:
            return json_error(str(e), 404)
        except BackendError as e:
            return json_error(str(e), 500)

        return jsonify(
            {
                "success": True,
                "student_id": stats.student_id,
                "roll_number": stats.roll_number,
                "full_name": stats.full_name,
                "total_sessions": stats.total_sessions,
                "present_count": stats.present_count,
                "absent_count": stats.absent_count,
                "late_count": stats.late_count,
                "excused_count": stats.excused_count,
                "attendance_percentage": f"{stats.attendance_percentage:.2f}",
            }
        )
