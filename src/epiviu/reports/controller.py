from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..container import Container

CSV_FIELDS = ["staff_name", "shift", "sector_name", "missed_date"]


def register(app: Flask, container: Container, *, prefix: str = "/api") -> None:
    def _requested_data():
        start, end = container.report_service.resolve_range(
            request.args.get("startDate") or request.args.get("start"),
            request.args.get("endDate") or request.args.get("end"),
        )
        return container.report_service.report(start, end)

    @app.route(f"{prefix}/reports", methods=["GET"], endpoint="reports")
    def reports():
        data = _requested_data()
        return jsonify([r.to_dict() for r in data.rows])

    @app.route(f"{prefix}/reports/summary", methods=["GET"], endpoint="reports_summary")
    def reports_summary():
        month = request.args.get("month")
        if month:
            summary = container.report_service.monthly_summary(month.strip())
        else:
            summary = container.report_service.summarize(_requested_data())
        return jsonify(summary.to_dict())

    @app.route(f"{prefix}/reports.csv", methods=["GET"], endpoint="reports_csv")
    def reports_csv():
        data = _requested_data()

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in data.rows:
            item = row.to_dict()
            item["missed_date"] = item["missed_date"] or ""
            writer.writerow(item)

        filename = f"visitas_{data.start_date.strftime('%Y%m%d')}_{data.end_date.strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
