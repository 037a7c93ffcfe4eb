import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[3]


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


BASE_URL = os.environ.get("GSMSPEC_BASE_URL", "https://www.gsmarena.com/")
if not BASE_URL.endswith("/"):
    BASE_URL += "/"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/116.0.5845.188 Safari/537.36"
)

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Upgrade-Insecure-Requests": "1",
}

# seconds
REQUEST_TIMEOUT = _env_float("GSMSPEC_TIMEOUT", 25.0)
FETCH_COOLDOWN = _env_float("GSMSPEC_COOLDOWN", 0.5)

MAX_LISTING_PAGES = int(_env_float("GSMSPEC_MAX_PAGES", 200))

LOG_DIR = Path(os.environ.get("GSMSPEC_LOG_DIR", str(BASE_DIR / "logs")))
LOG_FILE = LOG_DIR / "gsmspec.log"

BRANDS_PAGE = "makers.php3"
ADV_SEARCH_PAGE = "search.php3"
QUICK_SEARCH_PAGE = "results.php3"
