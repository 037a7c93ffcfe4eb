from typing import List, Optional

from ..config.settings import ADV_SEARCH_PAGE, BASE_URL, BRANDS_PAGE, MAX_LISTING_PAGES
from ..models import AdvancedSearchOption, Brand, Device, DeviceSummary
from ..processing.device import pictures_url, read_device
from ..processing.listing import brand_page_url, read_brands, read_listing, split_brand_id
from ..processing.options import read_search_options
from ..processing.search import decode_search_page, search_url
from ..utils.logging import get_logger
from .fetcher import Fetcher

logger = get_logger(__name__)


class GsmSpecClient:
    """Public operations over one fetcher (and therefore one rate-limit gate)."""

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        base_url: str = BASE_URL,
        max_pages: int = MAX_LISTING_PAGES,
    ) -> None:
        self.fetcher = fetcher or Fetcher()
        self.base_url = base_url
        self.max_pages = max_pages

    def get_all_brands(self) -> List[Brand]:
        soup = self.fetcher.fetch(f"{self.base_url}{BRANDS_PAGE}")
        return read_brands(soup)

    def get_device(self, device_id: str) -> Device:
        soup = self.fetcher.fetch(f"{self.base_url}{device_id}.php")
        pictures = self.fetcher.fetch(pictures_url(device_id, self.base_url))
        device = read_device(device_id, soup, pictures, base_url=self.base_url)
        logger.info("Fetched device %s (%s)", device_id, device.name or "unnamed")
        return device

    def search(self, query: str) -> List[DeviceSummary]:
        soup = self.fetcher.fetch(search_url(query, self.base_url))
        results = decode_search_page(soup, base_url=self.base_url)
        logger.info("Search %r: %d results", query, len(results))
        return results

    def get_all_devices_of_brand(self, brand_id: str) -> List[DeviceSummary]:
        """Every listing page of a brand, until a page comes back empty."""
        # reject ids the page URLs cannot be built from before anything is fetched
        split_brand_id(brand_id)
        devices = read_listing(
            self.fetcher.fetch(f"{self.base_url}{brand_id}.php"), base_url=self.base_url
        )
        logger.info("%s page 1: %d devices", brand_id, len(devices))

        page = 2
        while True:
            if page > self.max_pages:
                logger.warning(
                    "%s: stopped after %d pages without reaching an empty page",
                    brand_id, self.max_pages,
                )
                break
            url = brand_page_url(brand_id, page, self.base_url)
            rows = read_listing(self.fetcher.fetch(url), base_url=self.base_url)
            if not rows:
                break
            logger.info("%s page %d: %d devices", brand_id, page, len(rows))
            devices.extend(rows)
            page += 1

        return devices

    def get_adv_search_options(self) -> List[AdvancedSearchOption]:
        soup = self.fetcher.fetch(f"{self.base_url}{ADV_SEARCH_PAGE}")
        return read_search_options(soup)
