"""Assemble a Device from a specification page and its pictures page.

The spec page is one table per section (#specs-list). Most value cells are
tagged with a stable ``data-spec`` attribute; a few (loudspeaker, jack,
charging, infrared) only carry a row label.

    <tr>
      <th rowspan="3">Main Camera</th>
      <td class="ttl"><a href="...">Triple</a></td>
      <td class="nfo" data-spec="cam1modules">50 MP, f/1.8, ...<br>12 MP, ...</td>
    </tr>
"""

from typing import Callable, List, Optional, TypeVar
from urllib.parse import urljoin

from ..config.rules import (
    MAIN_CAMERA_LABEL,
    MAIN_PHOTO,
    MODEL_NAME,
    PICTURES,
    PICTURES_SEGMENT,
    SELFIE_CAMERA_LABEL,
    SPECS_TABLE,
)
from ..config.settings import BASE_URL
from ..errors import FieldParseError
from ..models import (
    Device,
    DeviceBattery,
    DeviceBody,
    DeviceCamera,
    DeviceComms,
    DeviceDisplay,
    DeviceFeatures,
    DeviceLaunch,
    DeviceMemory,
    DeviceMemoryInternal,
    DeviceMisc,
    DeviceNetwork,
    DevicePlatform,
    DeviceSound,
)
from .dom import attr_of, lines_of, select, select_one, text_of
from .normalize import (
    parse_camera_modules,
    parse_dimensions,
    parse_display_resolution,
    parse_display_size,
    parse_launch_status,
    parse_os,
    parse_sar_regions,
    parse_storage_options,
    parse_weight,
    split_clauses,
    split_video,
)

T = TypeVar("T")


def pictures_id(device_id: str) -> str:
    """'apple_iphone_15-12559' -> 'apple_iphone_15-pictures-12559'"""
    head, sep, rest = device_id.partition("-")
    if not sep:
        return f"{head}-{PICTURES_SEGMENT}"
    return f"{head}-{PICTURES_SEGMENT}-{rest}"


def pictures_url(device_id: str, base_url: Optional[str] = None) -> str:
    return f"{base_url or BASE_URL}{pictures_id(device_id)}.php"


# =========================
# Cell lookup
# =========================

def _cell(soup, tag: str):
    # usually the td.nfo itself; "nettech" sits on an anchor inside it
    return select_one(soup, f'{SPECS_TABLE} [data-spec="{tag}"]')


def spec_text(soup, tag: str) -> str:
    return text_of(_cell(soup, tag))


def spec_lines(soup, tag: str) -> List[str]:
    return lines_of(_cell(soup, tag))


def _label_cell(soup, label: str):
    wanted = label.lower()
    for ttl in select(soup, f"{SPECS_TABLE} td.ttl"):
        if text_of(ttl).lower() == wanted:
            return ttl.find_next_sibling("td", class_="nfo")
    return None


def labelled_text(soup, label: str) -> Optional[str]:
    """Value of the row whose label cell reads ``label``; None when there is no such row."""
    cell = _label_cell(soup, label)
    if cell is None:
        return None
    return text_of(cell)


def network_bands(soup, tag: str) -> str:
    """
    Band list for one technology. Long lists overflow into following rows
    that have neither a label nor a data-spec tag; those are collected until
    the next tagged row or the end of the table.
    """
    cell = _cell(soup, tag)
    if cell is None:
        return ""
    parts = [text_of(cell)]
    row = cell.find_parent("tr")
    siblings = row.find_next_siblings("tr") if row is not None else []
    for sibling in siblings:
        info = sibling.find("td", class_="nfo")
        if info is None or info.has_attr("data-spec"):
            break
        if text_of(sibling.find("td", class_="ttl")):
            break
        parts.append(text_of(info))
    return "\n".join(p for p in parts if p)


def camera_type(soup, label: str) -> str:
    """Anchor text next to the section header containing ``label`` ("Triple", "Single", ...)."""
    wanted = label.lower()
    for th in select(soup, f"{SPECS_TABLE} th"):
        if wanted not in text_of(th).lower():
            continue
        for td in th.find_next_siblings("td"):
            a = td.find("a")
            if a is not None:
                return text_of(a)
        return ""
    return ""


# =========================
# Blocks
# =========================

def _read_network(soup) -> DeviceNetwork:
    return DeviceNetwork(
        technology=spec_text(soup, "nettech"),
        bands_2g=network_bands(soup, "net2g"),
        bands_3g=network_bands(soup, "net3g"),
        bands_4g=network_bands(soup, "net4g"),
        bands_5g=network_bands(soup, "net5g"),
        speed=spec_text(soup, "speed"),
    )


def _read_launch(soup) -> DeviceLaunch:
    status, release_date = parse_launch_status(spec_text(soup, "status"))
    return DeviceLaunch(
        announced=spec_text(soup, "year"),
        status=status,
        release_date=release_date,
    )


def _read_body(soup) -> DeviceBody:
    body = DeviceBody(
        weight=parse_weight(spec_text(soup, "weight")),
        build=spec_text(soup, "build"),
        sim=spec_text(soup, "sim"),
        other=spec_lines(soup, "bodyother"),
    )
    dimensions = spec_text(soup, "dimensions")
    if dimensions:
        try:
            body.dimensions = parse_dimensions(dimensions)
        except FieldParseError:
            # dimensions stay at their defaults
            pass
    return body


def _read_display(soup) -> DeviceDisplay:
    type_clauses = split_clauses(spec_text(soup, "displaytype"))
    others = type_clauses[1:] + spec_lines(soup, "displayother")
    return DeviceDisplay(
        type=type_clauses[0] if type_clauses else "",
        size=parse_display_size(spec_text(soup, "displaysize")),
        resolution=parse_display_resolution(spec_text(soup, "displayresolution")),
        protection=split_clauses(spec_text(soup, "displayprotection")),
        others=others,
    )


def _read_platform(soup) -> DevicePlatform:
    return DevicePlatform(
        os=parse_os(spec_text(soup, "os")),
        chipset=spec_text(soup, "chipset"),
        cpu=spec_text(soup, "cpu"),
        gpu=spec_text(soup, "gpu"),
    )


def _read_memory(soup) -> DeviceMemory:
    return DeviceMemory(
        card_slot=spec_text(soup, "memoryslot"),
        internal=DeviceMemoryInternal(
            storage_options=parse_storage_options(spec_text(soup, "internalmemory")),
            other=spec_text(soup, "memoryother"),
        ),
    )


def _read_camera(soup, prefix: str, label: str) -> DeviceCamera:
    video, other = split_video(spec_text(soup, f"{prefix}video"))
    return DeviceCamera(
        type=camera_type(soup, label),
        specs=parse_camera_modules("\n".join(spec_lines(soup, f"{prefix}modules"))),
        features=split_clauses(spec_text(soup, f"{prefix}features")),
        video=video,
        other=other,
    )


def _read_sound(soup) -> DeviceSound:
    return DeviceSound(
        loud_speaker=labelled_text(soup, "Loudspeaker") or "",
        jack=labelled_text(soup, "3.5mm jack") or "",
    )


def _read_comms(soup) -> DeviceComms:
    return DeviceComms(
        wlan=split_clauses(spec_text(soup, "wlan")),
        bluetooth=split_clauses(spec_text(soup, "bluetooth")),
        gps=split_clauses(spec_text(soup, "gps")),
        nfc=spec_text(soup, "nfc"),
        infrared=labelled_text(soup, "Infrared port"),
        radio=spec_text(soup, "radio"),
        usb=split_clauses(spec_text(soup, "usb")),
    )


def _read_features(soup) -> DeviceFeatures:
    return DeviceFeatures(
        sensors=split_clauses(spec_text(soup, "sensors")),
        other=spec_lines(soup, "featuresother"),
    )


def _read_battery(soup) -> DeviceBattery:
    charging = _label_cell(soup, "Charging")
    return DeviceBattery(
        type=spec_text(soup, "batdescription1"),
        charging=lines_of(charging),
    )


def _read_misc(soup) -> DeviceMisc:
    return DeviceMisc(
        colors=split_clauses(spec_text(soup, "colors")),
        models=split_clauses(spec_text(soup, "models")),
        price=spec_text(soup, "price"),
        sar=parse_sar_regions(spec_text(soup, "sar-eu"), spec_text(soup, "sar-us")),
    )


def read_pictures(soup, base_url: Optional[str] = None) -> List[str]:
    base = base_url or BASE_URL
    urls = []
    for img in select(soup, PICTURES):
        src = attr_of(img, "src") or attr_of(img, "data-src")
        if src:
            urls.append(urljoin(base, src))
    return urls


def _block(name: str, reader: Callable[..., T], default: Callable[[], T], *args) -> T:
    try:
        return reader(*args)
    except (FieldParseError, ValueError):
        return default()


def read_device(device_id: str, soup, pictures_soup=None, base_url: Optional[str] = None) -> Device:
    """Build the Device record; one failing block never takes the others down."""
    return Device(
        id=device_id,
        name=text_of(select_one(soup, MODEL_NAME)),
        photo=attr_of(select_one(soup, MAIN_PHOTO), "src"),
        network=_block("network", _read_network, DeviceNetwork, soup),
        launch=_block("launch", _read_launch, DeviceLaunch, soup),
        body=_block("body", _read_body, DeviceBody, soup),
        display=_block("display", _read_display, DeviceDisplay, soup),
        platform=_block("platform", _read_platform, DevicePlatform, soup),
        memory=_block("memory", _read_memory, DeviceMemory, soup),
        main_camera=_block("main camera", _read_camera, DeviceCamera, soup, "cam1", MAIN_CAMERA_LABEL),
        selfie_camera=_block("selfie camera", _read_camera, DeviceCamera, soup, "cam2", SELFIE_CAMERA_LABEL),
        sound=_block("sound", _read_sound, DeviceSound, soup),
        comms=_block("comms", _read_comms, DeviceComms, soup),
        features=_block("features", _read_features, DeviceFeatures, soup),
        battery=_block("battery", _read_battery, DeviceBattery, soup),
        misc=_block("misc", _read_misc, DeviceMisc, soup),
        pictures=read_pictures(pictures_soup, base_url) if pictures_soup is not None else [],
    )
