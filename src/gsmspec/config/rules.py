"""Lookup tables and markup conventions the parsers depend on.

Upstream format drift should only ever need an edit here.
"""

from collections import namedtuple

MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

# =========================
# Listing rows
# =========================

ListingRule = namedtuple("ListingRule", ["field", "keyword"])

# Order matters: a clause is only matched against rules after the last accepted one.
LISTING_CLAUSE_RULES = (
    ListingRule("inch_display", "display"),
    ListingRule("chipset", "chipset"),
    ListingRule("primary_camera", "primary camera"),
    ListingRule("selfie_camera", "front camera"),
    ListingRule("battery", "battery"),
    ListingRule("storage", "storage"),
    ListingRule("memory", "RAM"),
)

LISTING_CONTAINER_CLASS = "makers"
LISTING_CONTAINER = f"div.{LISTING_CONTAINER_CLASS}"
LISTING_ANCHORS = "div.makers ul li a"
BRAND_ANCHORS = "div.st-text table td > a"

# =========================
# Specification page
# =========================

SPECS_TABLE = "#specs-list"
MODEL_NAME = "h1[data-spec=modelname], h1.specs-phone-name-title"
MAIN_PHOTO = "div.specs-photo-main img"
PICTURES = "#pictures-list img"
PICTURES_SEGMENT = "pictures"

MAIN_CAMERA_LABEL = "Main Camera"
SELFIE_CAMERA_LABEL = "Selfie camera"

OS_UPGRADE_MARKER = "up to"
RELEASED_MARKER = "Released"

SAR_HEAD_MARKER = "(head)"
SAR_BODY_MARKER = "(body)"

# =========================
# Quick search
# =========================

# name of the JS constant -> CipherParams field
CIPHER_CONSTANTS = {
    "IV": "iv",
    "KEY": "key",
    "DATA": "data",
}

# =========================
# Advanced search form
# =========================

MULTI_SELECT = "select.phonefinder-select[multiple]"
SINGLE_SELECT = "select.phonefinder-select:not([multiple])"
RANGE_SLIDER = "div.phonefinder-slider"
CHECKBOX = "input[type=checkbox]"

OS_VERSION_LABEL = "Min OS Version"
OS_VERSION_VARIABLE = "osVersionNames"

# Slider bounds are client-rendered, the static page does not carry them.
RANGE_DEFAULT_MIN = 0
RANGE_DEFAULT_MAX = 100000
