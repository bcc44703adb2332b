from __future__ import annotations

from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import json_api, optional_int
from ..core.constants import DEFAULT_SLIP_LIST_LIMIT
from ..core.exceptions import ValidationError
from ..container import Container


def _parse_datetime(value):
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError("paymentDate must be an ISO date or datetime")


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/salary-slips/generate", methods=["POST"], endpoint="salary_slips_generate")
    @json_api
    def salary_slips_generate():
        data = request.get_json(silent=True) or {}
        if not data.get("month") or not data.get("year"):
            raise ValidationError("Month and year are required")

        report = payroll.generate_slips(
            month=data["month"],
            year=data["year"],
            user_id=optional_int(data.get("userId"), "userId"),
            overwrite=data.get("overwrite") is True,
            generated_by=optional_int(data.get("generatedBy"), "generatedBy"),
        )
        return jsonify(
            {
                "success": True,
                "message": f"Generated {len(report.created)} salary slip(s)",
                **report.to_dict(),
            }
        )

    @app.route("/api/salary-slips/preview", methods=["GET"], endpoint="salary_slips_preview")
    @json_api
    def salary_slips_preview():
        today = now_local()
        report = payroll.preview(
            month=request.args.get("month") or today.month,
            year=request.args.get("year") or today.year,
            user_id=optional_int(request.args.get("userId"), "userId"),
        )
        return jsonify({"success": True, **report.to_dict()})

    @app.route("/api/salary-slips", methods=["GET"], endpoint="salary_slips_list")
    @json_api
    def salary_slips_list():
        page = max(optional_int(request.args.get("page"), "page") or 1, 1)
        limit = max(optional_int(request.args.get("limit"), "limit") or DEFAULT_SLIP_LIST_LIMIT, 1)
        result = payroll.list_slips(
            month=optional_int(request.args.get("month"), "month"),
            year=optional_int(request.args.get("year"), "year"),
            user_id=optional_int(request.args.get("userId"), "userId"),
            payment_status=request.args.get("paymentStatus") or None,
            limit=limit,
            offset=(page - 1) * limit,
        )
        return jsonify(
            {
                "success": True,
                "slips": [s.to_dict() for s in result.slips],
                "pagination": {
                    "page": page,
                    "limit": limit,
                    "total": result.total,
                    "pages": -(-result.total // limit),
                },
            }
        )

    @app.route("/api/salary-slips/<int:slip_id>", methods=["GET"], endpoint="salary_slips_get")
    @json_api
    def salary_slips_get(slip_id: int):
        return jsonify({"success": True, "slip": payroll.get_slip_by_id(slip_id).to_dict()})

    @app.route("/api/salary-slips/user/<int:user_id>", methods=["GET"], endpoint="salary_slips_for_user")
    @json_api
    def salary_slips_for_user(user_id: int):
        month = optional_int(request.args.get("month"), "month")
        year = optional_int(request.args.get("year"), "year")
        if month is not None and year is not None:
            slip = payroll.get_slip(user_id=user_id, month=month, year=year)
            return jsonify({"success": True, "slip": slip.to_dict()})

        slips = payroll.list_user_slips(user_id=user_id, year=year)
        return jsonify({"success": True, "slips": [s.to_dict() for s in slips]})

    @app.route("/api/salary-slips/<int:slip_id>/payment", methods=["PATCH"], endpoint="salary_slips_payment")
    @json_api
    def salary_slips_payment(slip_id: int):
        data = request.get_json(silent=True) or {}
        if not data.get("paymentStatus"):
            raise ValidationError("paymentStatus is required")

        slip = payroll.set_payment_status(
            slip_id=slip_id,
            status=data["paymentStatus"],
            payment_date=_parse_datetime(data.get("paymentDate")),
            method=data.get("paymentMethod"),
            reference=data.get("paymentReference"),
            notes=data.get("paymentNotes"),
        )
        return jsonify({"success": True, "message": "Payment status updated successfully", "slip": slip.to_dict()})

    @app.route("/api/salary-slips/<int:slip_id>/lock", methods=["PATCH"], endpoint="salary_slips_lock")
    @json_api
    def salary_slips_lock(slip_id: int):
        data = request.get_json(silent=True) or {}
        locked = data.get("locked") is True
        slip = payroll.set_lock(slip_id=slip_id, locked=locked)
        return jsonify(
            {
                "success": True,
                "message": f"Salary slip {'locked' if locked else 'unlocked'} successfully",
                "slip": slip.to_dict(),
            }
        )

    @app.route("/api/salary-slips/<int:slip_id>", methods=["DELETE"], endpoint="salary_slips_delete")
    @json_api
    def salary_slips_delete(slip_id: int):
        payroll.delete_slip(slip_id=slip_id)
        return jsonify({"success": True, "message": "Salary slip deleted successfully"})
