#!/usr/bin/env python3
"""Tests for Vehicle class."""

from upkeep import Vehicle, vehicle_display


class TestVehicle:
    """Tests for Vehicle class."""

    def test_attributes(self):
        """All attributes are stored correctly."""
        vehicle = Vehicle("v1", "Toyota", "Camry", 2020, 15000, "Daily")
        assert vehicle.id == "v1"
        assert vehicle.make == "Toyota"
        assert vehicle.model == "Camry"
        assert vehicle.year == 2020
        assert vehicle.current_mileage == 15000
        assert vehicle.nickname == "Daily"

    def test_defaults(self):
        vehicle = Vehicle("v1", "Toyota", "Camry", 2020)
        assert vehicle.current_mileage == 0
        assert vehicle.nickname is None

    def test_name_property(self):
        vehicle = Vehicle("v1", "Subaru", "WRX", 2012)
        assert vehicle.name == "2012 Subaru WRX"

    def test_label_with_nickname(self):
        vehicle = Vehicle("v1", "Subaru", "WRX", 2012, nickname="Blue")
        assert vehicle.label == "Blue • 2012 Subaru WRX"
        assert vehicle_display(vehicle) == vehicle.label

    def test_label_without_nickname(self):
        """Label omits the nickname prefix when it is None or empty."""
        assert Vehicle("v1", "Honda", "Fit", 2024).label == "2024 Honda Fit"
        assert Vehicle("v1", "Honda", "Fit", 2024, nickname="").label == "2024 Honda Fit"
