import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urljoin, urlparse

from ..config.rules import (
    BRAND_ANCHORS,
    LISTING_ANCHORS,
    LISTING_CLAUSE_RULES,
    ListingRule,
)
from ..config.settings import BASE_URL
from ..errors import StructuralParseError
from ..models import Brand, DeviceSummary, DeviceSummarySpecs
from ..utils.logging import get_logger
from .dom import attr_of, clean_text, own_text, select, text_of
from .normalize import split_clauses, to_int

logger = get_logger(__name__)

# "<full name>. Announced <period>. Features <c1>, <c2>, ... ."
TITLE_RE = re.compile(
    r"^(?P<name>.*?)\.\s*"
    r"(?:Announced\s+(?P<announced>[^.]*)\.\s*)?"
    r"(?:Features\s+(?P<features>.*?))?\.?\s*$",
    re.DOTALL,
)


def id_from_href(href: str) -> str:
    """'samsung_galaxy_s24_ultra-12771.php' -> 'samsung_galaxy_s24_ultra-12771'"""
    path = urlparse(href).path.rsplit("/", 1)[-1]
    return path.split(".", 1)[0]


def parse_listing_title(title: str) -> Tuple[str, str, List[str]]:
    """Split an image title into (full name, announced period, feature clauses)."""
    title = clean_text(title)
    m = TITLE_RE.match(title)
    if not m:
        return title.rstrip("."), "", []
    features = m.group("features") or ""
    return (
        m.group("name").strip(),
        (m.group("announced") or "").strip(),
        split_clauses(features),
    )


def _strip_keyword(clause: str, keyword: str) -> str:
    return clean_text(clause.replace(keyword, " "))


def apply_clause_rules(
    clauses: List[str],
    rules: Iterable[ListingRule] = LISTING_CLAUSE_RULES,
) -> DeviceSummarySpecs:
    """
    Assign clauses to fields with a single advancing cursor.

    Each rule is tried once, in order, against the clause under the cursor;
    the cursor only moves when the clause carries the rule's keyword. A row
    without, say, a selfie camera therefore leaves that field empty instead
    of shifting every following clause by one.
    """
    specs = DeviceSummarySpecs()
    cursor = 0
    for rule in rules:
        if cursor >= len(clauses):
            break
        clause = clauses[cursor]
        if rule.keyword in clause:
            setattr(specs, rule.field, _strip_keyword(clause, rule.keyword))
            cursor += 1
    specs.other_features = list(clauses[cursor:])
    return specs


def _read_row(anchor, base_url: str) -> DeviceSummary:
    href = attr_of(anchor, "href")
    img = anchor.find("img")
    if img is None:
        raise StructuralParseError(f"listing row {href!r} has no image")

    full_name, announced, clauses = parse_listing_title(attr_of(img, "title"))
    span = anchor.find("span")
    name = text_of(span) if span is not None else text_of(anchor)
    return DeviceSummary(
        id=id_from_href(href),
        name=name,
        full_name=full_name,
        announced=announced,
        img=attr_of(img, "src"),
        specs=apply_clause_rules(clauses),
        url=urljoin(base_url, href) if href else "",
    )


def read_listing(soup, base_url: Optional[str] = None) -> List[DeviceSummary]:
    """Every device row of a listing document (brand page or search results)."""
    base = base_url or BASE_URL
    return [_read_row(a, base) for a in select(soup, LISTING_ANCHORS)]


def read_brands(soup) -> List[Brand]:
    anchors = select(soup, BRAND_ANCHORS)
    if not anchors:
        raise StructuralParseError("no brand rows found on the makers page")

    brands = []
    for a in anchors:
        href = attr_of(a, "href")
        if not href:
            continue
        count = text_of(a.find("span"))
        brands.append(
            Brand(
                id=id_from_href(href),
                name=own_text(a).replace('"', ""),
                number_of_devices=to_int(count.replace("devices", "")) if count else 0,
            )
        )
    logger.debug("Parsed %d brands", len(brands))
    return brands


def split_brand_id(brand_id: str) -> Tuple[str, str, str]:
    """'samsung-phones-9' -> ('samsung', 'phones', '9')"""
    parts = (brand_id or "").split("-")
    if len(parts) < 3 or not all(parts[:3]):
        raise StructuralParseError(
            f"brand id {brand_id!r} does not look like '<name>-phones-<code>'"
        )
    return parts[0], parts[1], parts[2]


def brand_page_url(brand_id: str, page: int, base_url: Optional[str] = None) -> str:
    """
    'samsung-phones-9', 3 -> '<base>samsung-phones-f-9-0-p3.php'
    """
    name, kind, code = split_brand_id(brand_id)
    return f"{base_url or BASE_URL}{name}-{kind}-f-{code}-0-p{page}.php"
