from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_optional_date
from ..common.web import current_user, login_required, to_json
from ..container import Container
from ..core.exceptions import NotFoundError
from .model import AttendanceRecord


def serialize_record(record: AttendanceRecord) -> dict:
    return to_json(asdict(record))


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        attendance_date = parse_optional_date(request.args.get("date"))
        records = service.list_records(current_user(), attendance_date)
        return jsonify([serialize_record(r) for r in records])

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_detail")
    @login_required
    def attendance_detail(attendance_id: int):
        return jsonify(serialize_record(service.get_record(current_user(), attendance_id)))

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @login_required
    def attendance_delete(attendance_id: int):
        service.delete_record(current_user(), attendance_id)
        return jsonify({"success": True, "message": "Attendance record deleted."})

    @app.route("/api/attendance/checkin/<employee_id>", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def attendance_checkin(employee_id: str):
        record = service.check_in(current_user(), employee_id)
        return jsonify(serialize_record(record))

    @app.route("/api/attendance/checkout/<employee_id>", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def attendance_checkout(employee_id: str):
        record = service.check_out(current_user(), employee_id)
        return jsonify(serialize_record(record))

    @app.route("/api/attendance/leave/<employee_id>", methods=["POST"], endpoint="attendance_leave")
    @login_required
    def attendance_leave(employee_id: str):
        attendance_date = parse_optional_date(request.args.get("date"))
        record = service.mark_leave(current_user(), employee_id, attendance_date)
        return jsonify(serialize_record(record))

    @app.route("/api/attendance/holiday/<employee_id>", methods=["POST"], endpoint="attendance_holiday")
    @login_required
    def attendance_holiday(employee_id: str):
        attendance_date = parse_optional_date(request.args.get("date"))
        record = service.mark_holiday(current_user(), employee_id, attendance_date)
        return jsonify(serialize_record(record))

    @app.route("/api/attendance/me/today", methods=["GET"], endpoint="attendance_my_today")
    @login_required
    def attendance_my_today():
        caller = current_user()
        if caller.employee_id is None:
            raise NotFoundError("This account is not linked to an employee")
        record = service.get_today_record(caller.employee_id)
        return jsonify(serialize_record(record) if record else None)
