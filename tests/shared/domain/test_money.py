"""Tests for minor-unit money helpers."""

from storefront.shared.money import percent_of, to_major_units, to_minor_units


class TestToMinorUnits:
    def test_whole_dollars(self):
        assert to_minor_units(10) == 1000

    def test_float_artifacts_do_not_leak(self):
        assert to_minor_units(19.99) == 1999
        assert to_minor_units(0.29) == 29

    def test_half_cent_rounds_up(self):
        assert to_minor_units(0.125) == 13


class TestToMajorUnits:
    def test_cents_to_dollars(self):
        assert to_major_units(2250) == 22.5
        assert to_major_units(1999) == 19.99


class TestPercentOf:
    def test_ten_percent(self):
        assert percent_of(2500, 10) == 250

    def test_rounds_half_up(self):
        assert percent_of(5, 10) == 1
        assert percent_of(4, 10) == 0

    def test_zero_percent(self):
        assert percent_of(2500, 0) == 0
