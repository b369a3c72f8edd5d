"""CSV rendering for report rows."""

import csv
import io
import re
from typing import Any, Dict, Iterable, List, Optional

from .money import format_money_cents
from .service_record import ServiceRecord
from .service_type import label_for_type
from .vehicle import Vehicle

_UNSAFE_NAME = re.compile(r"[^\w.-]+")


def to_csv(rows: List[Dict[str, Any]]) -> str:
    """
    Render rows as comma-separated text.

    The header is the key order of the first row. Fields containing a comma,
    quote or line break are quoted with inner quotes doubled. None and
    missing keys render as empty fields. No trailing newline.
    """
    if not rows:
        return ""
    headers = list(rows[0].keys())
    buf = io.StringIO()
    writer = csv.DictWriter(
        buf,
        fieldnames=headers,
        restval="",
        extrasaction="ignore",
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writeheader()
    for row in rows:
        if len(headers) == 1 and row.get(headers[0]) in (None, ""):
            # csv writes a lone empty field as "" so the line is not blank
            buf.write("\n")
        else:
            writer.writerow(row)
    return buf.getvalue()[:-1]


def build_record_rows(
    records: Iterable[ServiceRecord], vehicles: Iterable[Vehicle]
) -> List[Dict[str, Any]]:
    """Report rows for records; orphaned records show their vehicle id."""
    labels = {v.id: v.label for v in vehicles}
    rows = []
    for r in records:
        rows.append(
            {
                "Vehicle": labels.get(r.vehicle_id, r.vehicle_id),
                "Type": label_for_type(r.type),
                "Date": r.service_date,
                "Mileage": r.mileage,
                "CostUSD": format_money_cents(r.cost_cents),
                "Shop": r.shop_name or "",
                "Notes": r.notes or "",
            }
        )
    return rows


def safe_name(text: str) -> str:
    """Collapse characters that are awkward in file names to underscores."""
    return _UNSAFE_NAME.sub("_", text)


def export_filename(
    vehicle_label: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> str:
    base = safe_name(vehicle_label) if vehicle_label else "all-vehicles"
    return f"reports-{base}-{date_from or 'start'}_to_{date_to or 'end'}.csv"
