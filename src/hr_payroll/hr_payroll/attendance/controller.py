from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.validators import require_bs_month
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceRecord, RecordEdit
from .reader import read_workbook

logger = logging.getLogger(__name__)


def record_to_dict(r: AttendanceRecord) -> dict:
    data = asdict(r)
    data["work_date"] = r.work_date.isoformat()
    data["status"] = r.status.value
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/import", methods=["POST"], endpoint="attendance_import")
    def attendance_import():
        try:
            bs_year, bs_month = require_bs_month(request.form.get("bs_year"), request.form.get("bs_month"))
            upload = request.files.get("file")
            if upload is None or not upload.filename:
                raise ValidationError("An attendance file is required")
            imported_by = (request.form.get("imported_by") or "").strip() or "system"

            sheets = read_workbook(upload.stream, filename=upload.filename)
            summary = container.attendance_service.import_workbook(
                sheets, bs_year=bs_year, bs_month=bs_month, imported_by=imported_by
            )
            return jsonify(summary.as_dict())
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Attendance import failed")
            return jsonify({"error": "Internal error while importing attendance"}), 500

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        try:
            bs_year, bs_month = require_bs_month(request.args.get("bs_year"), request.args.get("bs_month"))
            records = container.attendance_service.list_month(bs_year, bs_month)
            return jsonify({"records": [record_to_dict(r) for r in records]})
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

    @app.route("/api/attendance/<int:record_id>", methods=["PATCH"], endpoint="attendance_update")
    def attendance_update(record_id: int):
        body = request.get_json(silent=True) or {}
        edit = RecordEdit(
            on_duty=body.get("on_duty"),
            off_duty=body.get("off_duty"),
            clock_in=body.get("clock_in"),
            clock_out=body.get("clock_out"),
            status=body.get("status"),
            remarks=body.get("remarks"),
        )
        try:
            record = container.attendance_service.update_record(record_id, edit)
            return jsonify(record_to_dict(record))
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="attendance_delete")
    def attendance_delete(record_id: int):
        try:
            container.attendance_service.delete_record(record_id)
            return jsonify({"deleted": 1})
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404

    @app.route("/api/attendance/month", methods=["DELETE"], endpoint="attendance_delete_month")
    def attendance_delete_month():
        try:
            bs_year, bs_month = require_bs_month(request.args.get("bs_year"), request.args.get("bs_month"))
            deleted = container.attendance_service.delete_month(bs_year, bs_month)
            return jsonify({"deleted": deleted})
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
