"""Typed records produced by the parsers.

Every field has a default so a node missing from the page shows up as an
empty value, never as a missing attribute.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Brand:
    id: str
    name: str = ""
    number_of_devices: int = 0


# =========================
# Listing rows
# =========================

@dataclass
class DeviceSummarySpecs:
    inch_display: str = ""
    chipset: str = ""
    primary_camera: str = ""
    selfie_camera: str = ""
    battery: str = ""
    storage: str = ""
    memory: str = ""
    other_features: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DeviceSummary:
    id: str
    name: str = ""
    full_name: str = ""
    announced: str = ""
    img: str = ""
    specs: DeviceSummarySpecs = field(default_factory=DeviceSummarySpecs)
    url: str = ""


# =========================
# Device page
# =========================

@dataclass
class DeviceNetwork:
    technology: str = ""
    bands_2g: str = ""
    bands_3g: str = ""
    bands_4g: str = ""
    bands_5g: str = ""
    speed: str = ""


@dataclass
class DeviceLaunch:
    announced: str = ""
    status: str = ""
    release_date: Optional[str] = None


@dataclass
class DeviceBodyDimensions:
    height_mm: float = 0.0
    width_mm: float = 0.0
    depth_mm: float = 0.0
    height_inch: float = 0.0
    width_inch: float = 0.0
    depth_inch: float = 0.0


@dataclass
class DeviceBodyWeight:
    weight_g: float = 0.0
    weight_oz: float = 0.0


@dataclass
class DeviceBody:
    dimensions: DeviceBodyDimensions = field(default_factory=DeviceBodyDimensions)
    weight: DeviceBodyWeight = field(default_factory=DeviceBodyWeight)
    build: str = ""
    sim: str = ""
    other: List[str] = field(default_factory=list)


@dataclass
class DeviceDisplaySize:
    area_cm: float = 0.0
    area_inch: float = 0.0
    screen_to_body_ratio: str = ""


@dataclass
class DeviceDisplayResolution:
    width: int = 0
    height: int = 0
    ratio: str = ""
    pixel_density_ppi: str = ""


@dataclass
class DeviceDisplay:
    type: str = ""
    size: DeviceDisplaySize = field(default_factory=DeviceDisplaySize)
    resolution: DeviceDisplayResolution = field(default_factory=DeviceDisplayResolution)
    protection: List[str] = field(default_factory=list)
    others: List[str] = field(default_factory=list)


@dataclass
class DevicePlatformOS:
    name: str = ""
    version: str = ""
    up_to: Optional[str] = None
    custom_name: Optional[str] = None


@dataclass
class DevicePlatform:
    os: DevicePlatformOS = field(default_factory=DevicePlatformOS)
    chipset: str = ""
    cpu: str = ""
    gpu: str = ""


@dataclass
class DeviceMemoryStorageOption:
    storage: str = ""
    memory: str = ""


@dataclass
class DeviceMemoryInternal:
    storage_options: List[DeviceMemoryStorageOption] = field(default_factory=list)
    other: str = ""


@dataclass
class DeviceMemory:
    card_slot: str = ""
    internal: DeviceMemoryInternal = field(default_factory=DeviceMemoryInternal)


@dataclass
class DeviceCameraSpecs:
    resolution: str = ""
    aperture: str = ""
    objective: str = ""
    features: List[str] = field(default_factory=list)


@dataclass
class DeviceCamera:
    type: str = ""
    specs: List[DeviceCameraSpecs] = field(default_factory=list)
    features: List[str] = field(default_factory=list)
    video: List[str] = field(default_factory=list)
    other: List[str] = field(default_factory=list)


@dataclass
class DeviceSound:
    loud_speaker: str = ""
    jack: str = ""


@dataclass
class DeviceComms:
    wlan: List[str] = field(default_factory=list)
    bluetooth: List[str] = field(default_factory=list)
    gps: List[str] = field(default_factory=list)
    nfc: str = ""
    infrared: Optional[str] = None
    radio: str = ""
    usb: List[str] = field(default_factory=list)


@dataclass
class DeviceFeatures:
    sensors: List[str] = field(default_factory=list)
    other: List[str] = field(default_factory=list)


@dataclass
class DeviceBattery:
    type: str = ""
    charging: List[str] = field(default_factory=list)


@dataclass
class DeviceMiscSarSpecs:
    head: str = ""
    body: str = ""


@dataclass
class DeviceMiscSar:
    eu: Optional[DeviceMiscSarSpecs] = None
    other: Optional[DeviceMiscSarSpecs] = None


@dataclass
class DeviceMisc:
    colors: List[str] = field(default_factory=list)
    models: List[str] = field(default_factory=list)
    price: str = ""
    sar: Optional[DeviceMiscSar] = None


@dataclass
class Device:
    id: str
    name: str = ""
    photo: str = ""
    network: DeviceNetwork = field(default_factory=DeviceNetwork)
    launch: DeviceLaunch = field(default_factory=DeviceLaunch)
    body: DeviceBody = field(default_factory=DeviceBody)
    display: DeviceDisplay = field(default_factory=DeviceDisplay)
    platform: DevicePlatform = field(default_factory=DevicePlatform)
    memory: DeviceMemory = field(default_factory=DeviceMemory)
    main_camera: DeviceCamera = field(default_factory=DeviceCamera)
    selfie_camera: DeviceCamera = field(default_factory=DeviceCamera)
    sound: DeviceSound = field(default_factory=DeviceSound)
    comms: DeviceComms = field(default_factory=DeviceComms)
    features: DeviceFeatures = field(default_factory=DeviceFeatures)
    battery: DeviceBattery = field(default_factory=DeviceBattery)
    misc: DeviceMisc = field(default_factory=DeviceMisc)
    pictures: List[str] = field(default_factory=list)


# =========================
# Advanced search form
# =========================

@dataclass(frozen=True)
class BaseOption:
    name: str
    label: str


@dataclass
class SelectOption:
    name: str
    values: List[BaseOption] = field(default_factory=list)
    type: str = field(default="select", init=False)


@dataclass
class MultiSelectOption:
    name: str
    values: List[BaseOption] = field(default_factory=list)
    type: str = field(default="multi-select", init=False)


@dataclass
class SelectOptionDivided:
    name: str
    values: Dict[str, List[BaseOption]] = field(default_factory=dict)
    type: str = field(default="select-divided", init=False)


@dataclass
class RangeOption:
    name: str
    min: float = 0
    max: float = 100000
    type: str = field(default="range", init=False)


@dataclass
class CheckboxOption:
    name: str
    selected: bool = False
    type: str = field(default="checkbox", init=False)


AdvancedSearchOption = Union[
    SelectOption,
    MultiSelectOption,
    SelectOptionDivided,
    RangeOption,
    CheckboxOption,
]


def to_dict(obj: Any) -> Any:
    """Plain dict/list form of a record (or list of records) for JSON output."""
    if isinstance(obj, (list, tuple)):
        return [to_dict(o) for o in obj]
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return obj
