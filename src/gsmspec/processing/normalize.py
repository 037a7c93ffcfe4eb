import math
import re
from typing import List, Optional, Tuple

from ..config.rules import (
    MONTHS,
    OS_UPGRADE_MARKER,
    RELEASED_MARKER,
    SAR_BODY_MARKER,
    SAR_HEAD_MARKER,
)
from ..errors import FieldParseError
from ..models import (
    DeviceBodyDimensions,
    DeviceBodyWeight,
    DeviceCameraSpecs,
    DeviceDisplayResolution,
    DeviceDisplaySize,
    DeviceMemoryStorageOption,
    DeviceMiscSar,
    DeviceMiscSarSpecs,
    DevicePlatformOS,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
WEIGHT_G_RE = re.compile(r"(\d+(?:\.\d+)?)\s*g\b")
WEIGHT_OZ_RE = re.compile(r"(\d+(?:\.\d+)?)\s*oz\b")
SIZE_INCH_RE = re.compile(r"(\d+(?:\.\d+)?)\s*inch", re.IGNORECASE)
SIZE_CM_RE = re.compile(r"(\d+(?:\.\d+)?)\s*cm", re.IGNORECASE)
SCREEN_RATIO_RE = re.compile(r"(~?\d+(?:\.\d+)?%)")
RESOLUTION_RE = re.compile(r"(\d+)\s*x\s*(\d+)")
ASPECT_RATIO_RE = re.compile(r"(\d+(?:\.\d+)?:\d+(?:\.\d+)?)\s*ratio")
PPI_RE = re.compile(r"(~?\d+)\s*ppi", re.IGNORECASE)
SAR_VALUE_RE = re.compile(r"([^()]+?)\s*\((head|body)\)")


def to_float(text: Optional[str]) -> float:
    """First number in the text, NaN when there is none."""
    if not text:
        return math.nan
    m = NUMBER_RE.search(text.replace(",", "."))
    if not m:
        return math.nan
    return float(m.group(0))


def to_int(text: Optional[str]) -> int:
    """First integer in the text, 0 when there is none."""
    if not text:
        return 0
    m = re.search(r"\d+", text)
    return int(m.group(0)) if m else 0


def split_clauses(text: Optional[str], sep: str = ",") -> List[str]:
    """Split on ``sep`` outside parentheses; strip and drop empty pieces.

    "Fingerprint (under display, ultrasonic), accelerometer"
      -> ["Fingerprint (under display, ultrasonic)", "accelerometer"]
    """
    if not text:
        return []
    out, buf, depth = [], [], 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")" and depth > 0:
            depth -= 1
        if ch == sep and depth == 0:
            out.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    out.append("".join(buf))
    return [piece.strip() for piece in out if piece.strip()]


# =========================
# Dates
# =========================

def parse_date(text: str) -> str:
    """
    "2024, January 17" -> "2024-01-17"

    Anything that does not have that exact shape is logged and handed back
    unchanged ("2024", "2024, Q3", "Exp. release 2024, March").
    """
    if not text:
        return text
    year, sep, rest = text.partition(",")
    year = year.strip()
    if not sep:
        logger.warning("Could not parse date %r: no comma after the year", text)
        return text
    if not (len(year) == 4 and year.isdigit()):
        logger.warning("Could not parse date %r: bad year %r", text, year)
        return text

    parts = rest.split()
    if len(parts) != 2:
        logger.warning("Could not parse date %r: expected '<Month> <day>'", text)
        return text
    month = MONTHS.get(parts[0].lower())
    if month is None:
        logger.warning("Could not parse date %r: unknown month %r", text, parts[0])
        return text
    if not parts[1].isdigit() or not 1 <= int(parts[1]) <= 31:
        logger.warning("Could not parse date %r: bad day %r", text, parts[1])
        return text

    return f"{year}-{month:02d}-{int(parts[1]):02d}"


def parse_launch_status(text: str) -> Tuple[str, Optional[str]]:
    """
    "Available. Released 2024, January 24" -> ("Available", "2024-01-24")
    "Cancelled" -> ("Cancelled", None)
    """
    if not text:
        return "", None
    status, sep, rest = text.partition(".")
    if not sep:
        return status.strip(), None
    released = rest.replace(RELEASED_MARKER, "").strip()
    if not released:
        return status.strip(), None
    return status.strip(), parse_date(released)


# =========================
# Body
# =========================

def _three_numbers(text: str, unit: str) -> List[float]:
    values = [to_float(part.replace(unit, "")) for part in text.split("x")]
    values = (values + [math.nan] * 3)[:3]
    return values


def parse_dimensions(text: str) -> DeviceBodyDimensions:
    """
    "162.3 x 79 x 8.6 mm (6.39 x 3.11 x 0.34 in)" -> six floats.

    Raises FieldParseError when the inch half is missing.
    """
    mm, sep, inch = (text or "").partition("(")
    if not sep:
        raise FieldParseError(f"dimensions without inch values: {text!r}")
    h_mm, w_mm, d_mm = _three_numbers(mm, "mm")
    h_in, w_in, d_in = _three_numbers(inch.replace(")", ""), "in")
    return DeviceBodyDimensions(
        height_mm=h_mm,
        width_mm=w_mm,
        depth_mm=d_mm,
        height_inch=h_in,
        width_inch=w_in,
        depth_inch=d_in,
    )


def parse_weight(text: str) -> DeviceBodyWeight:
    """"232 g (8.18 oz)" -> DeviceBodyWeight(232.0, 8.18)"""
    if not text:
        return DeviceBodyWeight()
    g = WEIGHT_G_RE.search(text)
    oz = WEIGHT_OZ_RE.search(text)
    return DeviceBodyWeight(
        weight_g=float(g.group(1)) if g else 0.0,
        weight_oz=float(oz.group(1)) if oz else 0.0,
    )


# =========================
# Display
# =========================

def parse_display_size(text: str) -> DeviceDisplaySize:
    """"6.8 inches, 113.5 cm2 (~88.5% screen-to-body ratio)" """
    if not text:
        return DeviceDisplaySize()
    inch = SIZE_INCH_RE.search(text)
    cm = SIZE_CM_RE.search(text)
    ratio = SCREEN_RATIO_RE.search(text)
    return DeviceDisplaySize(
        area_cm=float(cm.group(1)) if cm else 0.0,
        area_inch=float(inch.group(1)) if inch else 0.0,
        screen_to_body_ratio=ratio.group(1) if ratio else "",
    )


def parse_display_resolution(text: str) -> DeviceDisplayResolution:
    """"1440 x 3120 pixels, 19.5:9 ratio (~505 ppi density)" """
    if not text:
        return DeviceDisplayResolution()
    res = RESOLUTION_RE.search(text)
    ratio = ASPECT_RATIO_RE.search(text)
    ppi = PPI_RE.search(text)
    return DeviceDisplayResolution(
        width=int(res.group(1)) if res else 0,
        height=int(res.group(2)) if res else 0,
        ratio=ratio.group(1) if ratio else "",
        pixel_density_ppi=ppi.group(1) if ppi else "",
    )


# =========================
# Platform / memory
# =========================

def parse_os(text: str) -> DevicePlatformOS:
    """
    "Android 14, up to 7 major upgrades, One UI 6.1"
      -> name="Android", version="14", up_to="up to 7 major upgrades", custom_name="One UI 6.1"
    "Android 13, MIUI 14"
      -> name="Android", version="13", up_to=None, custom_name="MIUI 14"
    """
    clauses = [c.strip() for c in (text or "").split(",")]
    if not clauses or not clauses[0]:
        return DevicePlatformOS()

    name, _, version = clauses[0].partition(" ")
    up_to = None
    custom_name = None
    if len(clauses) > 1:
        if OS_UPGRADE_MARKER in clauses[1].lower():
            up_to = clauses[1]
            if len(clauses) > 2:
                custom_name = clauses[2]
        else:
            custom_name = clauses[1]
    return DevicePlatformOS(
        name=name.strip(),
        version=version.strip(),
        up_to=up_to or None,
        custom_name=custom_name or None,
    )


def parse_storage_options(text: str) -> List[DeviceMemoryStorageOption]:
    """"128GB 8GB RAM, 256GB 8GB RAM" -> [(128GB, 8GB RAM), (256GB, 8GB RAM)]"""
    options = []
    for clause in split_clauses(text):
        storage, _, memory = clause.partition(" ")
        options.append(DeviceMemoryStorageOption(storage=storage, memory=memory.strip()))
    return options


# =========================
# Camera
# =========================

def parse_camera_modules(text: str) -> List[DeviceCameraSpecs]:
    """
    One module per line break:
      "200 MP, f/1.7, 24mm (wide), 1/1.3", 0.6µm, multi-directional PDAF, OIS"
    Fields are positional; anything after the objective is a feature.
    """
    modules = []
    for line in (text or "").split("\n"):
        fields = split_clauses(line)
        if not fields:
            continue
        padded = fields + [""] * 3
        modules.append(
            DeviceCameraSpecs(
                resolution=padded[0],
                aperture=padded[1],
                objective=padded[2],
                features=fields[3:],
            )
        )
    return modules


def split_video(text: str) -> Tuple[List[str], List[str]]:
    """
    "4K@30/60fps, 1080p@30fps; gyro-EIS, HDR"
      -> (["4K@30/60fps", "1080p@30fps"], ["gyro-EIS", "HDR"])
    """
    primary, _, secondary = (text or "").partition(";")
    return split_clauses(primary), split_clauses(secondary)


# =========================
# SAR
# =========================

def parse_sar(text: str) -> Optional[DeviceMiscSarSpecs]:
    """
    "1.20 W/kg (head)    1.04 W/kg (body)" -> head="1.20 W/kg", body="1.04 W/kg"
    "" -> None (value not published)
    """
    cleaned = (text or "").replace("\xa0", " ").strip()
    if not cleaned:
        return None

    found = {kind: value.strip(" ,") for value, kind in SAR_VALUE_RE.findall(cleaned)}
    if found:
        return DeviceMiscSarSpecs(head=found.get("head", ""), body=found.get("body", ""))

    # unannotated: "<head>, <body>"
    parts = split_clauses(
        cleaned.replace(SAR_HEAD_MARKER, ",").replace(SAR_BODY_MARKER, "")
    )
    return DeviceMiscSarSpecs(
        head=parts[0] if parts else "",
        body=parts[1] if len(parts) > 1 else "",
    )


def parse_sar_regions(eu_text: str, us_text: str) -> Optional[DeviceMiscSar]:
    eu = parse_sar(eu_text)
    other = parse_sar(us_text)
    if eu is None and other is None:
        return None
    return DeviceMiscSar(eu=eu, other=other)
