import os
from typing import Iterable

import pandas as pd

from ..models import Brand, DeviceSummary
from ..utils.logging import get_logger

logger = get_logger(__name__)

SUMMARY_COLUMNS = [
    "id", "name", "full_name", "announced", "url", "img",
    "inch_display", "chipset", "primary_camera", "selfie_camera",
    "battery", "storage", "memory", "other_features",
]

BRAND_COLUMNS = ["id", "name", "number_of_devices"]


def summaries_to_frame(summaries: Iterable[DeviceSummary]) -> pd.DataFrame:
    rows = []
    for s in summaries:
        rows.append({
            "id": s.id,
            "name": s.name,
            "full_name": s.full_name,
            "announced": s.announced,
            "url": s.url,
            "img": s.img,
            "inch_display": s.specs.inch_display,
            "chipset": s.specs.chipset,
            "primary_camera": s.specs.primary_camera,
            "selfie_camera": s.specs.selfie_camera,
            "battery": s.specs.battery,
            "storage": s.specs.storage,
            "memory": s.specs.memory,
            "other_features": "; ".join(s.specs.other_features),
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def brands_to_frame(brands: Iterable[Brand]) -> pd.DataFrame:
    rows = [
        {"id": b.id, "name": b.name, "number_of_devices": b.number_of_devices}
        for b in brands
    ]
    df = pd.DataFrame(rows, columns=BRAND_COLUMNS)
    df["number_of_devices"] = df["number_of_devices"].astype(int)
    return df


def write_csv(df: pd.DataFrame, path: str) -> int:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info("Wrote %s (rows=%d)", path, len(df))
    return len(df)
