from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_bs_month, require_int
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .model import PayrollRow


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_month")
    def payroll_month():
        try:
            bs_year, bs_month = require_bs_month(request.args.get("bs_year"), request.args.get("bs_month"))
            report = container.payroll_service.generate_for_month(bs_year, bs_month)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify({"rows": [r.as_dict() for r in report.rows], "totals": report.totals})

    @app.route("/api/payroll/adjust", methods=["POST"], endpoint="payroll_adjust")
    def payroll_adjust():
        body = request.get_json(silent=True) or {}
        try:
            rows = [PayrollRow.from_dict(r) for r in body.get("rows") or []]
            employee_id = require_int(body.get("employee_id"), "employee_id")
            adjusted = container.payroll_service.quick_adjust(
                rows,
                employee_id,
                allowance=body.get("allowance"),
                advance=body.get("advance"),
            )
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        return jsonify(
            {
                "rows": [r.as_dict() for r in adjusted],
                "totals": container.payroll_service.totals(adjusted),
            }
        )
