from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import EmploymentStatus, WageBasis
from ..core.exceptions import ValidationError
from .model import Employee


def employee_to_dict(e: Employee) -> dict:
    return {
        "employee_id": e.employee_id,
        "name": e.name,
        "status": e.status.value,
        "wage_basis": e.wage_basis.value,
        "wage_amount": e.wage_amount,
        "allowance": e.allowance,
        "created_by": e.created_by,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        roster = container.employee_service.list_roster()
        return jsonify({"employees": [employee_to_dict(e) for e in roster]})

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    def employees_create():
        body = request.get_json(silent=True) or {}
        try:
            employee = container.employee_service.create_employee(
                name=str(body.get("name") or ""),
                wage_basis=WageBasis.from_text(body.get("wage_basis")),
                wage_amount=body.get("wage_amount"),
                allowance=body.get("allowance"),
                status=EmploymentStatus.from_text(body.get("status")),
                created_by=body.get("created_by"),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(employee_to_dict(employee)), 201
