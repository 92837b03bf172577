from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import first_of, json_body, login_required, shift_filter
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "/api") -> None:
    @app.route(f"{prefix}/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(
            str(first_of(data, "username", "name") or ""),
            str(data.get("password") or ""),
        )
        return jsonify({"success": True, **s_user.to_dict()})

    @app.route(f"{prefix}/change-password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            actor=g.actor,
            new_password=str(first_of(data, "newPassword", "new_password") or ""),
        )
        return jsonify({"success": True})

    @app.route(f"{prefix}/staff", methods=["GET"], endpoint="list_staff")
    def list_staff():
        shift = shift_filter(request.args.get("shift"))
        return jsonify([s.to_public_dict() for s in container.staff_service.list_staff(shift=shift)])

    @app.route(f"{prefix}/staff", methods=["POST"], endpoint="create_staff")
    @login_required
    def create_staff():
        data = json_body()
        staff_id = container.staff_service.create_staff(
            actor=g.actor,
            name=data.get("name"),
            shift=data.get("shift"),
            role=data.get("role") or "staff",
        )
        return jsonify({"id": staff_id})

    @app.route(f"{prefix}/staff/<int:staff_id>", methods=["PATCH"], endpoint="update_staff")
    @login_required
    def update_staff(staff_id: int):
        data = json_body()
        container.staff_service.update_shift(actor=g.actor, staff_id=staff_id, shift=data.get("shift"))
        return jsonify({"status": "updated"})

    @app.route(f"{prefix}/staff/<int:staff_id>", methods=["DELETE"], endpoint="delete_staff")
    @login_required
    def delete_staff(staff_id: int):
        container.staff_service.delete_staff(actor=g.actor, staff_id=staff_id)
        return jsonify({"status": "deleted"})
