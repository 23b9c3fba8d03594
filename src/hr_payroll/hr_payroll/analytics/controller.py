from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_bs_month
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/analytics", methods=["GET"], endpoint="analytics_month")
    def analytics_month():
        try:
            bs_year, bs_month = require_bs_month(request.args.get("bs_year"), request.args.get("bs_month"))
            bundle = container.analytics_service.compute_for_month(bs_year, bs_month)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(bundle.as_dict())
