"""Unit tests for gsmspec.processing.normalize."""

import logging
import math
import re

import pytest

from gsmspec.errors import FieldParseError
from gsmspec.processing.normalize import (
    parse_camera_modules,
    parse_date,
    parse_dimensions,
    parse_display_resolution,
    parse_display_size,
    parse_launch_status,
    parse_os,
    parse_sar,
    parse_sar_regions,
    parse_storage_options,
    parse_weight,
    split_clauses,
    split_video,
    to_float,
    to_int,
)


# =========================
# Numbers / clauses
# =========================

class TestNumbers:
    @pytest.mark.parametrize("text, expected", [
        ("162.3 mm", 162.3),
        ("~505 ppi", 505.0),
        ("6,39", 6.39),
    ])
    def test_to_float(self, text, expected):
        assert to_float(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", None, "n/a"])
    def test_to_float_missing_is_nan(self, text):
        assert math.isnan(to_float(text))

    def test_to_int(self):
        assert to_int("1434 devices") == 1434
        assert to_int("none") == 0
        assert to_int(None) == 0


class TestSplitClauses:
    def test_commas_inside_parentheses_are_kept(self):
        text = "Fingerprint (under display, ultrasonic), accelerometer, gyro"
        assert split_clauses(text) == [
            "Fingerprint (under display, ultrasonic)",
            "accelerometer",
            "gyro",
        ]

    def test_empty_pieces_dropped(self):
        assert split_clauses("a, , b,") == ["a", "b"]

    def test_empty(self):
        assert split_clauses("") == []
        assert split_clauses(None) == []

    def test_custom_separator(self):
        assert split_clauses("8K@24fps; gyro-EIS", sep=";") == ["8K@24fps", "gyro-EIS"]


# =========================
# Dates
# =========================

DATE_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TestParseDate:
    @pytest.mark.parametrize("text, expected", [
        ("2024, January 17", "2024-01-17"),
        ("2023, September 12", "2023-09-12"),
        ("2019, May 3", "2019-05-03"),
        ("2024,  december  31", "2024-12-31"),
    ])
    def test_full_dates(self, text, expected):
        result = parse_date(text)
        assert result == expected
        assert DATE_SHAPE.match(result)

    @pytest.mark.parametrize("text", [
        "2024",
        "2024, Q3",
        "2024, March",
        "Exp. release 2024, March",
        "Not officially announced yet",
        "24, May 3",
        "2024, Febtober 3",
        "2024, March 32",
        "2024, March 3rd",
    ])
    def test_unparsable_returned_unchanged(self, text):
        assert parse_date(text) == text

    def test_unparsable_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gsmspec"):
            parse_date("2024, Q3")
        assert any("Could not parse date" in r.getMessage() for r in caplog.records)

    def test_empty(self):
        assert parse_date("") == ""


class TestLaunchStatus:
    def test_released(self):
        assert parse_launch_status("Available. Released 2024, January 24") == (
            "Available",
            "2024-01-24",
        )

    def test_no_period(self):
        assert parse_launch_status("Cancelled") == ("Cancelled", None)

    def test_release_quarter_kept_verbatim(self):
        assert parse_launch_status("Coming soon. Exp. release 2024, Q3") == (
            "Coming soon",
            "Exp. release 2024, Q3",
        )

    def test_empty(self):
        assert parse_launch_status("") == ("", None)


# =========================
# Body
# =========================

class TestDimensions:
    def test_full(self):
        d = parse_dimensions("162.3 x 79 x 8.6 mm (6.39 x 3.11 x 0.34 in)")
        assert (d.height_mm, d.width_mm, d.depth_mm) == (162.3, 79.0, 8.6)
        assert (d.height_inch, d.width_inch, d.depth_inch) == (6.39, 3.11, 0.34)

    def test_missing_inch_half_raises(self):
        with pytest.raises(FieldParseError):
            parse_dimensions("162.3 x 79 x 8.6 mm")

    def test_field_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_dimensions("-")

    def test_short_list_padded_with_nan(self):
        d = parse_dimensions("162.3 x 79 mm (6.39 x 3.11 in)")
        assert d.height_mm == 162.3
        assert math.isnan(d.depth_mm)
        assert math.isnan(d.depth_inch)


class TestWeight:
    def test_grams_and_ounces(self):
        w = parse_weight("232 g (8.18 oz)")
        assert (w.weight_g, w.weight_oz) == (232.0, 8.18)

    def test_first_of_alternatives(self):
        assert parse_weight("232 g or 233 g (8.18 oz)").weight_g == 232.0

    def test_missing(self):
        w = parse_weight("")
        assert (w.weight_g, w.weight_oz) == (0.0, 0.0)


# =========================
# Display
# =========================

class TestDisplay:
    def test_size(self):
        s = parse_display_size("6.8 inches, 113.5 cm 2 (~88.5% screen-to-body ratio)")
        assert s.area_inch == 6.8
        assert s.area_cm == 113.5
        assert s.screen_to_body_ratio == "~88.5%"

    def test_resolution(self):
        r = parse_display_resolution("1440 x 3120 pixels, 19.5:9 ratio (~505 ppi density)")
        assert (r.width, r.height) == (1440, 3120)
        assert r.ratio == "19.5:9"
        assert r.pixel_density_ppi == "~505"

    def test_empty(self):
        assert parse_display_size("").area_inch == 0.0
        assert parse_display_resolution("").width == 0


# =========================
# Platform / memory
# =========================

class TestParseOs:
    def test_upgrade_clause(self):
        os_ = parse_os("Android 14, up to 7 major Android upgrades, One UI 6.1")
        assert os_.name == "Android"
        assert os_.version == "14"
        assert os_.up_to == "up to 7 major Android upgrades"
        assert os_.custom_name == "One UI 6.1"

    def test_skin_without_upgrade_clause(self):
        os_ = parse_os("Android 13, MIUI 14")
        assert os_.up_to is None
        assert os_.custom_name == "MIUI 14"

    def test_version_keeps_extra_words(self):
        os_ = parse_os("iOS 17, upgradable to iOS 17.4")
        assert (os_.name, os_.version) == ("iOS", "17")
        assert os_.custom_name == "upgradable to iOS 17.4"

    def test_empty(self):
        os_ = parse_os("")
        assert os_.name == ""
        assert os_.up_to is None


def test_storage_options():
    options = parse_storage_options("256GB 12GB RAM, 512GB 12GB RAM, 1TB 12GB RAM")
    assert [(o.storage, o.memory) for o in options] == [
        ("256GB", "12GB RAM"),
        ("512GB", "12GB RAM"),
        ("1TB", "12GB RAM"),
    ]


# =========================
# Camera
# =========================

class TestCameraModules:
    def test_positional_fields(self):
        modules = parse_camera_modules(
            '200 MP, f/1.7, 24mm (wide), 1/1.3", 0.6µm, OIS\n'
            "12 MP, f/2.2, 13mm, 120˚ (ultrawide)"
        )
        assert len(modules) == 2
        first = modules[0]
        assert (first.resolution, first.aperture, first.objective) == ("200 MP", "f/1.7", "24mm (wide)")
        assert first.features == ['1/1.3"', "0.6µm", "OIS"]
        assert modules[1].features == ["120˚ (ultrawide)"]

    def test_short_line_defaults_to_empty(self):
        (module,) = parse_camera_modules("8 MP")
        assert module.resolution == "8 MP"
        assert module.aperture == ""
        assert module.objective == ""
        assert module.features == []

    def test_blank_lines_skipped(self):
        assert parse_camera_modules("\n\n") == []

    def test_split_video(self):
        video, other = split_video("4K@30/60fps, 1080p@30fps; gyro-EIS, HDR")
        assert video == ["4K@30/60fps", "1080p@30fps"]
        assert other == ["gyro-EIS", "HDR"]

    def test_split_video_without_extras(self):
        assert split_video("1080p@30fps") == (["1080p@30fps"], [])


# =========================
# SAR
# =========================

class TestSar:
    def test_head_and_body(self):
        sar = parse_sar("1.20 W/kg (head)    1.04 W/kg (body)")
        assert sar.head == "1.20 W/kg"
        assert sar.body == "1.04 W/kg"

    def test_non_breaking_spaces(self):
        sar = parse_sar("0.95 W/kg (head)\xa0\xa0\xa0\xa0 1.38 W/kg (body)\xa0\xa0")
        assert (sar.head, sar.body) == ("0.95 W/kg", "1.38 W/kg")

    def test_head_only(self):
        sar = parse_sar("0.99 W/kg (head)")
        assert (sar.head, sar.body) == ("0.99 W/kg", "")

    def test_unpublished_is_none(self):
        assert parse_sar("") is None
        assert parse_sar(None) is None

    def test_regions(self):
        regions = parse_sar_regions("0.95 W/kg (head)", "")
        assert regions.eu.head == "0.95 W/kg"
        assert regions.other is None
        assert parse_sar_regions("", "") is None
