"""Flask web application serving vehicle upkeep data as JSON and CSV."""

import logging
from datetime import date
from pathlib import Path

from flask import Flask, Response, abort, jsonify, request

from upkeep import DueItem, ValidationError, label_for_type, type_token
from upkeep.config import load_settings
from upkeep.csv_export import build_record_rows, export_filename, to_csv
from upkeep.reports import (
    compute_all_due,
    filter_records,
    overdue,
    partition_by_status,
    records_for_vehicle,
    spend_summary,
    upcoming,
)
from upkeep.store import (
    find_vehicle,
    load_records,
    load_vehicles,
    record_to_dict,
    records_path,
    vehicle_to_dict,
    vehicles_path,
)

logger = logging.getLogger(__name__)

settings = load_settings()

app = Flask(__name__)
app.secret_key = settings.secret_key
app.config["DATA_DIR"] = settings.data_dir
app.config["LEAD_MILES"] = settings.lead_miles
app.config["LEAD_DAYS"] = settings.lead_days


def get_vehicles():
    """Load all vehicles from the configured data directory."""
    return load_vehicles(vehicles_path(Path(app.config["DATA_DIR"])))


def get_records():
    """Load all service records from the configured data directory."""
    return load_records(records_path(Path(app.config["DATA_DIR"])))


def get_vehicle_or_404(vehicles, vehicle_id: str):
    vehicle = find_vehicle(vehicles, vehicle_id)
    if vehicle is None:
        abort(404, description=f"Vehicle '{vehicle_id}' not found")
    return vehicle


def lead_window():
    """Lead window from the query string, falling back to app config."""
    lead_miles = request.args.get("lead_miles", app.config["LEAD_MILES"], type=int)
    lead_days = request.args.get("lead_days", app.config["LEAD_DAYS"], type=int)
    return lead_miles, lead_days


def due_item_to_dict(item: DueItem) -> dict:
    """Serialize a DueItem with camelCase keys."""
    return {
        "vehicleId": item.vehicle_id,
        "vehicleLabel": item.vehicle_label,
        "type": type_token(item.type),
        "typeLabel": item.type_label,
        "status": item.status.name,
        "dueByMiles": item.due_by_mileage,
        "dueByDate": item.due_by_date,
        "distanceToDue": item.distance_to_due,
        "daysToDue": item.days_to_due,
    }


@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify(error=str(e)), 400


@app.errorhandler(404)
def handle_not_found(e):
    return jsonify(error=e.description), 404


@app.route("/api/vehicles")
def vehicles_index():
    """All vehicles with display labels."""
    vehicles = get_vehicles()
    return jsonify(
        vehicles=[dict(vehicle_to_dict(v), label=v.label) for v in vehicles]
    )


@app.route("/api/due")
def due_dashboard():
    """Upcoming and overdue items across all vehicles."""
    today = request.args.get("today") or date.today().isoformat()
    lead_miles, lead_days = lead_window()

    items = compute_all_due(get_vehicles(), get_records(), today, lead_miles, lead_days)
    buckets = partition_by_status(items)

    return jsonify(
        asOf=today,
        leadMiles=lead_miles,
        leadDays=lead_days,
        counts={status.name.lower(): len(bucket) for status, bucket in buckets.items()},
        overdue=[due_item_to_dict(i) for i in overdue(items, lead_miles, lead_days)],
        upcoming=[due_item_to_dict(i) for i in upcoming(items, lead_miles, lead_days)],
    )


@app.route("/api/vehicles/<vehicle_id>/due")
def vehicle_due(vehicle_id: str):
    """Every tracked service for one vehicle, most urgent first."""
    vehicle = get_vehicle_or_404(get_vehicles(), vehicle_id)
    today = request.args.get("today") or date.today().isoformat()
    lead_miles, lead_days = lead_window()

    items = compute_all_due([vehicle], get_records(), today, lead_miles, lead_days)
    items.sort(key=lambda i: (i.status.value, i.type_label))

    return jsonify(
        vehicle=dict(vehicle_to_dict(vehicle), label=vehicle.label),
        asOf=today,
        items=[due_item_to_dict(i) for i in items],
    )


@app.route("/api/vehicles/<vehicle_id>/records")
def vehicle_records(vehicle_id: str):
    """A vehicle's service records, newest first."""
    vehicle = get_vehicle_or_404(get_vehicles(), vehicle_id)
    records = records_for_vehicle(get_records(), vehicle.id)
    return jsonify(
        records=[
            dict(record_to_dict(r), typeLabel=label_for_type(r.type)) for r in records
        ]
    )


def _filtered_report_records():
    vehicles = get_vehicles()
    vehicle_id = request.args.get("vehicle") or None
    vehicle = get_vehicle_or_404(vehicles, vehicle_id) if vehicle_id else None
    records = filter_records(
        get_records(),
        vehicle_id=vehicle_id,
        date_from=request.args.get("from") or None,
        date_to=request.args.get("to") or None,
    )
    return vehicles, vehicle, records


@app.route("/api/reports")
def reports():
    """Spend summary for a vehicle (or all) over an inclusive date range."""
    _, _, records = _filtered_report_records()
    summary = spend_summary(records)
    return jsonify(
        totalCents=summary.total_cents,
        count=summary.count,
        averageCents=summary.average_cents,
        byType=[
            {"type": t, "label": label_for_type(t), "totalCents": c}
            for t, c in summary.by_type
        ],
        byMonth=[{"month": m, "totalCents": c} for m, c in summary.by_month],
    )


@app.route("/api/reports.csv")
def reports_csv():
    """Download the filtered records as CSV."""
    vehicles, vehicle, records = _filtered_report_records()
    filename = export_filename(
        vehicle.label if vehicle else None,
        request.args.get("from") or None,
        request.args.get("to") or None,
    )
    logger.debug("Exporting %d records to %s", len(records), filename)
    return Response(
        to_csv(build_record_rows(records, vehicles)),
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="127.0.0.1", port=5001)
