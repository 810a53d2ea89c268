from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.validators import require_positive_id
from ..common.web import login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _report_args():
        today = container.clock.now().date()
        start = parse_optional_date(request.args.get("start")) or today.replace(day=1)
        end = parse_optional_date(request.args.get("end")) or today
        employee_s = request.args.get("employee_id")
        employee_id = require_positive_id(employee_s, "employee_id") if employee_s else None
        return start, end, employee_id

    def _int_arg(name: str, default: int) -> int:
        value = request.args.get(name)
        if value is None or not value.strip():
            return default
        try:
            return int(value)
        except ValueError:
            raise ValidationError(f"{name} must be an integer")

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="report_attendance")
    @login_required
    def report_attendance():
        start, end, employee_id = _report_args()
        data = service.build_attendance_report(start=start, end=end, employee_id=employee_id)
        return jsonify(
            {
                "start": start.isoformat(),
                "end": end.isoformat(),
                "rows": data.rows,
                "summary": data.summary,
            }
        )

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="report_attendance_csv")
    @login_required
    def report_attendance_csv():
        start, end, employee_id = _report_args()
        data = service.build_attendance_report(start=start, end=end, employee_id=employee_id)

        filename = f"attendance_report_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            service.export_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/dashboard/attendance-pattern", methods=["GET"], endpoint="attendance_pattern")
    @login_required
    def attendance_pattern():
        today = container.clock.now().date()
        year = _int_arg("year", today.year)
        month = _int_arg("month", today.month)
        return jsonify(service.monthly_pattern(year=year, month=month))

    @app.route("/api/attendance/roster", methods=["GET"], endpoint="attendance_roster")
    @login_required
    def attendance_roster():
        attendance_date = parse_optional_date(request.args.get("date")) or container.clock.now().date()
        return jsonify(
            {
                "date": attendance_date.isoformat(),
                "employees": service.daily_roster(attendance_date=attendance_date),
            }
        )
