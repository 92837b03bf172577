from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.http import first_of, json_body, login_required, shift_filter
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "/api") -> None:
    @app.route(f"{prefix}/sectors", methods=["GET"], endpoint="list_sectors")
    def list_sectors():
        shift = shift_filter(request.args.get("shift"))
        return jsonify([s.to_dict() for s in container.sector_service.list_sectors(shift=shift)])

    @app.route(f"{prefix}/sectors", methods=["POST"], endpoint="create_sector")
    @login_required
    def create_sector():
        data = json_body()
        sector_id = container.sector_service.create_sector(
            actor=g.actor,
            name=data.get("name"),
            staff_id=first_of(data, "staffId", "staff_id"),
        )
        return jsonify({"id": sector_id})

    @app.route(f"{prefix}/sectors/<int:sector_id>", methods=["PATCH"], endpoint="reassign_sector")
    @login_required
    def reassign_sector(sector_id: int):
        data = json_body()
        container.sector_service.reassign_sector(
            actor=g.actor,
            sector_id=sector_id,
            staff_id=first_of(data, "staffId", "staff_id"),
        )
        return jsonify({"status": "updated"})

    @app.route(f"{prefix}/sectors/<int:sector_id>", methods=["DELETE"], endpoint="delete_sector")
    @login_required
    def delete_sector(sector_id: int):
        container.sector_service.delete_sector(actor=g.actor, sector_id=sector_id)
        return jsonify({"status": "deleted"})
