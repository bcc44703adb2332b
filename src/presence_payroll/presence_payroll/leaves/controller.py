from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_api, optional_int
from ..core.exceptions import ValidationError
from ..container import Container
from .model import LeaveSpan


def _leave_to_dict(leave: LeaveSpan) -> dict:
    return {
        "leave_id": leave.leave_id,
        "user_id": leave.user_id,
        "type": leave.leave_type.value,
        "start_date": leave.start_date.strftime("%Y-%m-%d"),
        "end_date": leave.end_date.strftime("%Y-%m-%d"),
        "status": leave.status.value,
        "reason": leave.reason or "",
        "approver_id": leave.approver_id,
        "approved_at": leave.approved_at.isoformat() if leave.approved_at else None,
    }


def register(app: Flask, container: Container) -> None:
    leaves = container.leave_service

    def _parse_date(value, field_name: str):
        try:
            return parse_iso_date(str(value))
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} must be YYYY-MM-DD")

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_request")
    @json_api
    def leaves_request():
        data = request.get_json(silent=True) or {}
        user_id = optional_int(data.get("userId"), "userId")
        if user_id is None:
            raise ValidationError("userId is required")

        leave_id = leaves.request_leave(
            user_id=user_id,
            leave_type=data.get("type") or "",
            start_date=_parse_date(data.get("startDate"), "startDate"),
            end_date=_parse_date(data.get("endDate"), "endDate"),
            reason=data.get("reason"),
        )
        return jsonify({"success": True, "leave_id": leave_id}), 201

    @app.route("/api/leaves/<int:leave_id>/status", methods=["PATCH"], endpoint="leaves_decide")
    @json_api
    def leaves_decide(leave_id: int):
        data = request.get_json(silent=True) or {}
        approver_id = optional_int(data.get("approverId"), "approverId")
        if approver_id is None:
            raise ValidationError("approverId is required")

        leave = leaves.decide(leave_id=leave_id, status=data.get("status") or "", approver_id=approver_id)
        return jsonify({"success": True, "message": "Leave updated and attendance synced", "leave": _leave_to_dict(leave)})

    @app.route("/api/leaves/user/<int:user_id>", methods=["GET"], endpoint="leaves_for_user")
    @json_api
    def leaves_for_user(user_id: int):
        return jsonify({"success": True, "leaves": [_leave_to_dict(x) for x in leaves.list_for_user(user_id=user_id)]})
