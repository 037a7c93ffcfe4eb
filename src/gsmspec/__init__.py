"""gsmspec - mobile device specification scraper.

Public API surface - import submodules directly for full access:
  gsmspec.ingestion.client     - GsmSpecClient (brands, devices, search, options)
  gsmspec.ingestion.fetcher    - Fetcher, RateLimiter
  gsmspec.processing.normalize - text normalizers for spec cells
  gsmspec.processing.listing   - listing / brand page parsing
  gsmspec.processing.device    - device page assembly
  gsmspec.processing.search    - encrypted search result decoding
  gsmspec.processing.options   - advanced search form schema
  gsmspec.app.cli              - CLI entry point
"""

from .errors import GsmSpecError
from .ingestion.client import GsmSpecClient

_default_client = None


def _client() -> GsmSpecClient:
    global _default_client
    if _default_client is None:
        _default_client = GsmSpecClient()
    return _default_client


def get_all_brands():
    return _client().get_all_brands()


def get_device(device_id: str):
    return _client().get_device(device_id)


def search(query: str):
    return _client().search(query)


def get_all_devices_of_brand(brand_id: str):
    return _client().get_all_devices_of_brand(brand_id)


def get_adv_search_options():
    return _client().get_adv_search_options()


def main():
    """CLI entry point."""
    from .app.main import main as _main
    return _main()


__all__ = [
    "GsmSpecClient",
    "GsmSpecError",
    "get_all_brands",
    "get_device",
    "search",
    "get_all_devices_of_brand",
    "get_adv_search_options",
    "main",
]
