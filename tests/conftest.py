"""Shared fixtures for the gsmspec test suite."""

import base64
import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

# Ensure src/ is on the path so "import gsmspec" works when running from repo root.
repo_root = Path(__file__).resolve().parents[1]
src_path = repo_root / "src"
for p in (src_path, repo_root):
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

# Reconfigure stdout/stderr for Windows Unicode safety.
try:
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")
except Exception:
    pass

from gsmspec.processing.dom import make_soup  # noqa: E402

FIXTURES = Path(__file__).parent / "fixtures"

TEST_BASE = "https://example.test/"

CIPHER_KEY = bytes(range(32))
CIPHER_IV = bytes(range(100, 116))


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Listing markup
# ---------------------------------------------------------------------------

ULTRA_TITLE = (
    "Samsung Galaxy S24 Ultra Android smartphone. Announced Jan 2024. "
    "Features 6.8\u2033 display, Snapdragon 8 Gen 3 chipset, 200 MP primary camera, "
    "12 MP front camera, 5000 mAh battery, 1024 GB storage, 12 GB RAM, Corning Gorilla Armor."
)

A15_TITLE = (
    "Samsung Galaxy A15 Android smartphone. Announced Dec 2023. "
    "Features 6.5\u2033 display, Mediatek Helio G99 chipset, 50 MP primary camera, "
    "5000 mAh battery, 256 GB storage, 8 GB RAM."
)


def listing_row(device_id: str, name: str, title: str, img: str = "") -> str:
    img = img or f"https://fdn2.gsmarena.com/vv/bigpic/{device_id}.jpg"
    return (
        f'<li><a href="{device_id}.php">'
        f'<img src="{img}" title="{title}">'
        f"<strong><span>{name}</span></strong></a></li>"
    )


def listing_page(*rows: str) -> str:
    return (
        "<html><body><div class=\"makers\"><ul>"
        + "".join(rows)
        + "</ul></div></body></html>"
    )


def simple_row(n: int) -> str:
    return listing_row(
        f"samsung_galaxy_m{n}-{1000 + n}",
        f"Galaxy M{n}",
        f"Samsung Galaxy M{n} Android smartphone. Announced 2023. Features 6.6\u2033 display, 5000 mAh battery.",
    )


# ---------------------------------------------------------------------------
# Encrypted search page
# ---------------------------------------------------------------------------

def js_escape(markup: str) -> str:
    """Escape markup the way it sits inside a JS string literal."""
    return markup.replace('"', '\\"').replace("/", "\\/")


def encrypt(plaintext: str, key: bytes = CIPHER_KEY, iv: bytes = CIPHER_IV) -> bytes:
    padder = padding.PKCS7(128).padder()
    padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def search_page(iv: str, key: str, data: str) -> str:
    return (
        "<html><head><script>var ga = 1;</script></head><body>"
        "<div id=\"review-body\"></div>"
        "<script type=\"text/javascript\">\n"
        f'const IV = "{iv}";\n'
        f'const KEY = "{key}";\n'
        f'const DATA = "{data}";\n'
        "decryptAndRender(DATA);\n"
        "</script></body></html>"
    )


def search_fragment() -> str:
    return (
        '<div class="makers"><ul>'
        + listing_row("samsung_galaxy_s24_ultra-12771", "Galaxy S24 Ultra", ULTRA_TITLE)
        + listing_row("samsung_galaxy_a15-12637", "Galaxy A15", A15_TITLE)
        + "</ul></div>"
    )


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeFetcher:
    """Serves canned pages by URL and records every request."""

    def __init__(self, pages=None, default=None):
        self.pages = dict(pages or {})
        self.default = default
        self.requested = []

    def fetch(self, url):
        self.requested.append(url)
        if url in self.pages:
            html = self.pages[url]
        elif self.default is not None:
            html = self.default
        else:
            raise AssertionError(f"unexpected fetch: {url}")
        return make_soup(html)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def device_soup():
    return make_soup(read_fixture("device_specs.html"))


@pytest.fixture
def pictures_soup():
    return make_soup(read_fixture("device_pictures.html"))


@pytest.fixture
def makers_soup():
    return make_soup(read_fixture("makers.html"))


@pytest.fixture
def search_form_soup():
    return make_soup(read_fixture("search_form.html"))


@pytest.fixture
def listing_soup():
    return make_soup(
        listing_page(
            listing_row("samsung_galaxy_s24_ultra-12771", "Galaxy S24 Ultra", ULTRA_TITLE),
            listing_row("samsung_galaxy_a15-12637", "Galaxy A15", A15_TITLE),
        )
    )


@pytest.fixture
def encrypted_search_html():
    data = b64(encrypt(js_escape(search_fragment())))
    return search_page(b64(CIPHER_IV), b64(CIPHER_KEY), data)
