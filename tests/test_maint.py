#!/usr/bin/env python3
"""Tests for maint CLI formatting, table helpers and commands."""

import csv

import pytest

from upkeep import DueItem, ServiceRecord, Status, Vehicle
from upkeep.store import (
    load_records,
    load_vehicles,
    records_path,
    save_records,
    save_vehicles,
    vehicles_path,
)
from maint import (
    format_miles,
    format_cost,
    format_remaining,
    format_time_remaining,
    truncate,
    make_due_table,
    make_history_table,
    main,
)


def make_item(**kwargs):
    return DueItem(
        vehicle_id="v1",
        vehicle_label="2015 Subaru BRZ",
        type="oil_change",
        status=kwargs.pop("status", Status.OK),
        **kwargs,
    )


class TestFormatMiles:
    """Tests for format_miles."""

    def test_formats_number(self):
        assert format_miles(50000) == "50,000"
        assert format_miles(0) == "0"

    def test_none_returns_dash(self):
        assert format_miles(None) == "-"


class TestFormatCost:
    """Tests for format_cost."""

    def test_formats_cents(self):
        assert format_cost(7550) == "$75.50"
        assert format_cost(0) == "$0.00"

    def test_none_returns_dash(self):
        assert format_cost(None) == "-"


class TestFormatRemaining:
    """Tests for format_remaining."""

    def test_none_returns_dash(self):
        assert format_remaining(make_item()) == "-"

    def test_positive_remaining(self):
        assert format_remaining(make_item(distance_to_due=2500)) == "2,500"

    def test_negative_remaining_overdue(self):
        item = make_item(status=Status.OVERDUE, distance_to_due=-1500)
        assert format_remaining(item) == "-1,500"


class TestFormatTimeRemaining:
    """Tests for format_time_remaining."""

    def test_none_returns_dash(self):
        assert format_time_remaining(make_item()) == "-"

    def test_positive_months_and_days(self):
        assert format_time_remaining(make_item(days_to_due=105)) == "3mo 15d"

    def test_positive_days_only(self):
        assert format_time_remaining(make_item(days_to_due=14)) == "14d"

    def test_negative_overdue_months(self):
        item = make_item(status=Status.OVERDUE, days_to_due=-65)
        assert format_time_remaining(item) == "-2mo 5d"

    def test_negative_overdue_days_only(self):
        item = make_item(status=Status.OVERDUE, days_to_due=-10)
        assert format_time_remaining(item) == "-10d"


class TestTruncate:
    """Tests for truncate."""

    def test_none_returns_dash(self):
        assert truncate(None) == "-"

    def test_short_text_unchanged(self):
        assert truncate("short") == "short"

    def test_long_text_truncated_with_ellipsis(self):
        # max_len=15 → 12 chars + "..." = 15 total
        assert truncate("this is a very long note", max_len=15) == "this is a ve..."


class TestMakeDueTable:
    """Tests for make_due_table."""

    def test_empty_list_returns_empty_rows(self):
        assert make_due_table([]) == []

    def test_single_item_row(self):
        item = make_item(
            status=Status.DUE_SOON,
            due_by_mileage=54000,
            due_by_date="2024-07-01",
            distance_to_due=2000,
            days_to_due=11,
        )
        assert make_due_table([item]) == [
            ["2015 Subaru BRZ", "Oil Change", "54,000", "2024-07-01", "2,000", "11d"]
        ]

    def test_no_projection_uses_dashes(self):
        assert make_due_table([make_item()])[0][2:] == ["-", "-", "-", "-"]


class TestMakeHistoryTable:
    """Tests for make_history_table."""

    def test_converts_records_to_rows(self):
        vehicles = [Vehicle("v1", "Subaru", "BRZ", 2015)]
        records = [
            ServiceRecord("abcdef123456", "v1", "oil_change", "2025-01-15", 95000, 4500, "self", "Motul 5w30"),
        ]
        rows = make_history_table(records, vehicles)
        assert rows == [
            ["2025-01-15", "2015 Subaru BRZ", "Oil Change", "95,000", "self", "$45.00", "Motul 5w30", "abcdef12"]
        ]

    def test_orphaned_record_shows_vehicle_id(self):
        records = [ServiceRecord("r1", "gone", "battery", "2025-01-15", 1)]
        assert make_history_table(records, [])[0][1] == "gone"


# =============================================================================
# Commands
# =============================================================================


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    for name in ("UPKEEP_DATA_DIR", "UPKEEP_LEAD_MILES", "UPKEEP_LEAD_DAYS", "UPKEEP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    save_vehicles(
        vehicles_path(tmp_path),
        [
            Vehicle("v1", "Subaru", "BRZ", 2015, 54000, "Zippy"),
            Vehicle("v2", "Honda", "Fit", 2019, 52000),
        ],
    )
    save_records(
        records_path(tmp_path),
        [
            ServiceRecord("r1", "v1", "oil_change", "2024-01-01", 49000, 4599, "Quick Lube"),
            ServiceRecord("r2", "v2", "oil_change", "2024-01-01", 49000, 3000),
            ServiceRecord("r3", "v2", "battery", "2024-02-15", 50000, 15000, notes="cold, dead"),
        ],
    )
    return tmp_path


def run(data_dir, *args):
    return main(["--data-dir", str(data_dir), *args])


class TestStatusCommand:
    """Tests for the status command."""

    def test_buckets_printed(self, data_dir, capsys):
        assert run(data_dir, "status", "--today", "2024-06-20") == 0
        out = capsys.readouterr().out
        assert "OVERDUE:" in out
        assert "DUE SOON:" in out
        assert out.index("OVERDUE:") < out.index("DUE SOON:")
        assert "Zippy • 2015 Subaru BRZ" in out

    def test_single_vehicle(self, data_dir, capsys):
        assert run(data_dir, "status", "--today", "2024-06-20", "--vehicle", "v2") == 0
        out = capsys.readouterr().out
        assert "DUE SOON:" in out
        assert "OVERDUE:" not in out

    def test_nothing_due(self, data_dir, capsys):
        assert run(data_dir, "status", "--today", "2024-02-01", "--vehicle", "v2") == 0
        assert "Nothing due." in capsys.readouterr().out

    def test_unknown_vehicle(self, data_dir, capsys):
        assert run(data_dir, "status", "--vehicle", "nope") == 1
        assert "Unknown vehicle" in capsys.readouterr().out

    def test_bad_today(self, data_dir, capsys):
        assert run(data_dir, "status", "--today", "20/06/2024") == 1
        assert "Error:" in capsys.readouterr().out

    def test_impossible_stored_date_does_not_hide_other_vehicles(self, data_dir, capsys):
        records = load_records(records_path(data_dir))
        records.append(ServiceRecord("bad", "v1", "tire_rotation", "2024-02-30", 50000))
        save_records(records_path(data_dir), records)

        assert run(data_dir, "status", "--today", "2024-07-15") == 0
        out = capsys.readouterr().out
        assert "2019 Honda Fit" in out
        assert "Zippy • 2015 Subaru BRZ" in out

    def test_invalid_log_level(self, data_dir, monkeypatch, capsys):
        monkeypatch.setenv("UPKEEP_LOG_LEVEL", "LOUD")
        assert run(data_dir, "status") == 1
        assert "UPKEEP_LOG_LEVEL" in capsys.readouterr().out


class TestVehicleCommands:
    """Tests for vehicle management commands."""

    def test_vehicles_lists_labels(self, data_dir, capsys):
        assert run(data_dir, "vehicles") == 0
        out = capsys.readouterr().out
        assert "Zippy • 2015 Subaru BRZ" in out
        assert "2019 Honda Fit" in out

    def test_add_vehicle(self, data_dir, capsys):
        assert run(data_dir, "add-vehicle", "Mazda", "MX-5", "1991", "--mileage", "120000") == 0
        vehicles = load_vehicles(vehicles_path(data_dir))
        assert len(vehicles) == 3
        assert vehicles[-1].name == "1991 Mazda MX-5"
        assert vehicles[-1].current_mileage == 120000

    def test_add_vehicle_dry_run(self, data_dir, capsys):
        assert run(data_dir, "add-vehicle", "Mazda", "MX-5", "1991", "--dry-run") == 0
        assert len(load_vehicles(vehicles_path(data_dir))) == 2
        assert "dry run" in capsys.readouterr().out

    def test_update_miles(self, data_dir):
        assert run(data_dir, "update-miles", "v2", "53000") == 0
        vehicle = [v for v in load_vehicles(vehicles_path(data_dir)) if v.id == "v2"][0]
        assert vehicle.current_mileage == 53000

    def test_update_miles_negative_rejected(self, data_dir, capsys):
        assert run(data_dir, "update-miles", "v2", "-1") == 1

    def test_delete_vehicle_cascades(self, data_dir):
        assert run(data_dir, "delete-vehicle", "v2") == 0
        assert [v.id for v in load_vehicles(vehicles_path(data_dir))] == ["v1"]
        assert [r.id for r in load_records(records_path(data_dir))] == ["r1"]

    def test_delete_vehicle_keep_records(self, data_dir, capsys):
        assert run(data_dir, "delete-vehicle", "v2", "--keep-records") == 0
        assert len(load_records(records_path(data_dir))) == 3
        capsys.readouterr()
        run(data_dir, "vehicles")
        assert "2 record(s) reference a missing vehicle" in capsys.readouterr().out


class TestRecordCommands:
    """Tests for log, history, delete-record and edit-record."""

    def test_log(self, data_dir, capsys):
        code = run(
            data_dir, "log", "v1", "oil_change", "--date", "2024-06-25",
            "--mileage", "54100", "--cost", "$49.99", "--shop", " Dealer ",
        )
        assert code == 0
        records = load_records(records_path(data_dir))
        assert len(records) == 4
        newest = records[0]
        assert newest.vehicle_id == "v1"
        assert newest.type == "oil_change"
        assert newest.service_date == "2024-06-25"
        assert newest.cost_cents == 4999
        assert newest.shop_name == "Dealer"
        assert newest.notes is None

    def test_log_clears_overdue(self, data_dir, capsys):
        run(data_dir, "log", "v1", "oil_change", "--date", "2024-06-25", "--mileage", "54000")
        capsys.readouterr()
        run(data_dir, "status", "--today", "2024-06-26", "--vehicle", "v1")
        assert "Nothing due." in capsys.readouterr().out

    def test_log_unknown_type(self, data_dir, capsys):
        assert run(data_dir, "log", "v1", "flux", "--mileage", "1") == 1
        assert "Unknown service type" in capsys.readouterr().out
        assert len(load_records(records_path(data_dir))) == 3

    def test_log_bad_date(self, data_dir, capsys):
        assert run(data_dir, "log", "v1", "battery", "--mileage", "1", "--date", "2024-02-30") == 1

    def test_log_dry_run(self, data_dir, capsys):
        assert run(data_dir, "log", "v1", "battery", "--mileage", "1", "--dry-run") == 0
        assert len(load_records(records_path(data_dir))) == 3

    def test_history_filters(self, data_dir, capsys):
        assert run(data_dir, "history", "--vehicle", "v2", "--type", "batt") == 0
        out = capsys.readouterr().out
        assert "Showing: 1 (filtered)" in out
        assert "Battery" in out
        assert "Oil Change" not in out

    def test_history_since(self, data_dir, capsys):
        assert run(data_dir, "history", "--since", "2024-02-01") == 0
        assert "Showing: 1 (filtered)" in capsys.readouterr().out

    def test_delete_record_by_prefix(self, data_dir):
        assert run(data_dir, "delete-record", "r3") == 0
        assert [r.id for r in load_records(records_path(data_dir))] == ["r1", "r2"]

    def test_delete_record_ambiguous(self, data_dir, capsys):
        assert run(data_dir, "delete-record", "r") == 1
        assert "ambiguous" in capsys.readouterr().out

    def test_edit_record_changes_only_given_fields(self, data_dir, capsys):
        code = run(
            data_dir, "edit-record", "r3", "--mileage", "50500",
            "--cost", "160", "--notes", "",
        )
        assert code == 0
        records = load_records(records_path(data_dir))
        assert [r.id for r in records] == ["r1", "r2", "r3"]
        edited = records[2]
        assert edited.vehicle_id == "v2"
        assert edited.type == "battery"
        assert edited.service_date == "2024-02-15"
        assert edited.mileage == 50500
        assert edited.cost_cents == 16000
        assert edited.notes is None
        out = capsys.readouterr().out
        assert "50,000 -> 50,500" in out
        assert "Record saved." in out

    def test_edit_record_type_and_date(self, data_dir):
        assert run(data_dir, "edit-record", "r1", "--type", "Tire_Rotation", "--date", "2024-01-02") == 0
        edited = load_records(records_path(data_dir))[0]
        assert edited.type == "tire_rotation"
        assert edited.service_date == "2024-01-02"
        assert edited.shop_name == "Quick Lube"

    def test_edit_record_dry_run(self, data_dir, capsys):
        assert run(data_dir, "edit-record", "r2", "--mileage", "1", "--dry-run") == 0
        assert load_records(records_path(data_dir))[1].mileage == 49000
        assert "dry run" in capsys.readouterr().out

    def test_edit_record_without_changes(self, data_dir, capsys):
        assert run(data_dir, "edit-record", "r2") == 0
        assert "No changes." in capsys.readouterr().out

    def test_edit_record_bad_date(self, data_dir, capsys):
        assert run(data_dir, "edit-record", "r2", "--date", "2024-02-30") == 1
        assert "Error:" in capsys.readouterr().out
        assert load_records(records_path(data_dir))[1].service_date == "2024-01-01"

    def test_edit_record_unknown(self, data_dir, capsys):
        assert run(data_dir, "edit-record", "zz", "--mileage", "1") == 1
        assert "Unknown record" in capsys.readouterr().out


class TestReportCommand:
    """Tests for the report command."""

    def test_summary(self, data_dir, capsys):
        assert run(data_dir, "report", "--from", "2024-01-01", "--to", "2024-12-31") == 0
        out = capsys.readouterr().out
        assert "Total spend: $225.99" in out
        assert "Records: 3" in out
        assert "Avg cost / record: $75.33" in out

    def test_empty_range(self, data_dir, capsys):
        assert run(data_dir, "report", "--from", "2025-01-01") == 0
        assert "No data in the selected range." in capsys.readouterr().out

    def test_csv_export(self, data_dir, tmp_path, capsys):
        out_file = tmp_path / "out.csv"
        assert run(data_dir, "report", "--vehicle", "v2", "--csv", str(out_file)) == 0
        with open(out_file, newline="") as fp:
            rows = list(csv.DictReader(fp))
        assert [r["Type"] for r in rows] == ["Oil Change", "Battery"]
        assert rows[1]["Notes"] == "cold, dead"
        assert rows[1]["CostUSD"] == "150.00"


class TestSchedulesCommand:
    """Tests for the schedules command."""

    def test_lists_table(self, data_dir, capsys):
        assert run(data_dir, "schedules") == 0
        out = capsys.readouterr().out
        assert "Oil Change" in out
        assert "5,000 mi / 6 mo" in out
        assert "Battery" not in out
