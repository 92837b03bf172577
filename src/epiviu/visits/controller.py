from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import format_iso_date
from ..common.http import first_of, json_body, login_required, shift_filter
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "/api") -> None:
    @app.route(f"{prefix}/data", methods=["GET"], endpoint="dashboard_data")
    def dashboard_data():
        shift = shift_filter(request.args.get("shift"))
        today = container.toggle_service.today()

        staff = container.staff_service.list_staff(shift=shift)
        sectors = container.sector_service.list_sectors(shift=shift)
        sector_ids = {s.sector_id for s in sectors}
        missed = container.toggle_service.list_missed_for_date(today) & sector_ids
        totals = container.report_service.daily_totals(sorted(sector_ids), missed)

        return jsonify(
            {
                "date": format_iso_date(today),
                "staff": [s.to_public_dict() for s in staff],
                "sectors": [s.to_dict() for s in sectors],
                "missed": sorted(missed),
                "summary": {
                    "total": totals.total_sectors,
                    "visited": totals.visited_count,
                    "missed": totals.missed_count,
                },
            }
        )

    @app.route(f"{prefix}/toggle-missed", methods=["POST"], endpoint="toggle_missed")
    @login_required
    def toggle_missed():
        data = json_body()
        result = container.toggle_service.toggle_missed(
            actor=g.actor,
            sector_id=first_of(data, "sectorId", "sector_id"),
        )
        return jsonify(result.to_dict())
