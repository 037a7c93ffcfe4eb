"""Quick-search results decoder.

The results page does not ship its listing as markup. An inline script
carries three base64 string constants (IV, KEY, DATA); DATA is the listing
fragment, AES-CBC encrypted with PKCS7 padding, with its quotes and slashes
JS-escaped before encryption so it could sit inside a string literal.

Decoding is four stages, each with its own error:

    find_cipher_params   -> MissingCipherParamsError
    decrypt_payload      -> DecryptionError
    repair_fragment      -> FragmentRepairError
    parse_search_fragment-> StructuralParseError

CBC has no integrity check, so a damaged IV or key can still unpad
cleanly. The repair stage therefore also insists on a fragment that opens
with markup and carries an intact listing container tag.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote_plus

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..config.rules import CIPHER_CONSTANTS, LISTING_CONTAINER, LISTING_CONTAINER_CLASS
from ..config.settings import BASE_URL, QUICK_SEARCH_PAGE
from ..errors import (
    DecryptionError,
    FragmentRepairError,
    MissingCipherParamsError,
    StructuralParseError,
)
from ..models import DeviceSummary
from ..utils.logging import get_logger
from .dom import make_soup, select, select_one
from .listing import read_listing

logger = get_logger(__name__)

_CONSTANT_RE = {
    js_name: re.compile(
        r"\b(?:const|let|var)\s+" + re.escape(js_name) + r"\s*=\s*([\"'])(.*?)\1",
        re.DOTALL,
    )
    for js_name in CIPHER_CONSTANTS
}

# JS string escapes applied to the fragment before encryption
_ESCAPES = (
    ('\\"', '"'),
    ("\\'", "'"),
    ("\\/", "/"),
    ("\\n", "\n"),
    ("\\t", "\t"),
)

# <div class="... makers ...">, the listing container as an intact tag
_CONTAINER_MARKER_RE = re.compile(
    r"<div\s[^>]*\bclass\s*=\s*([\"'])(?:[^\"']*\s)?"
    + re.escape(LISTING_CONTAINER_CLASS)
    + r"(?:\s[^\"']*)?\1",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class CipherParams:
    iv: str
    key: str
    data: str


def search_url(query: str, base_url: str = BASE_URL) -> str:
    return f"{base_url}{QUICK_SEARCH_PAGE}?sQuickSearch=yes&sName={quote_plus(query)}"


def _scan_script(script: str) -> Dict[str, str]:
    found = {}
    for js_name, pattern in _CONSTANT_RE.items():
        m = pattern.search(script)
        if m:
            found[CIPHER_CONSTANTS[js_name]] = m.group(2)
    return found


def find_cipher_params(soup) -> CipherParams:
    """Pick the inline script that declares all three cipher constants."""
    best: Dict[str, str] = {}
    for script in select(soup, "script"):
        content = script.string or script.get_text()
        if not content:
            continue
        found = _scan_script(content)
        if len(found) == len(CIPHER_CONSTANTS):
            return CipherParams(**found)
        if len(found) > len(best):
            best = found

    missing = sorted(js for js, field in CIPHER_CONSTANTS.items() if field not in best)
    raise MissingCipherParamsError(
        f"missing decryption parameters: {', '.join(missing)} not found in page scripts"
    )


def _b64(value: str, what: str) -> bytes:
    try:
        return base64.b64decode(value.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecryptionError(f"{what} is not valid base64: {exc}") from exc


def decrypt_payload(params: CipherParams) -> str:
    """AES-CBC decrypt DATA with KEY/IV; returns the still-escaped fragment."""
    iv = _b64(params.iv, "IV")
    key = _b64(params.key, "KEY")
    data = _b64(params.data, "DATA")

    try:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        padded = decryptor.update(data) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        raw = unpadder.update(padded) + unpadder.finalize()
    except ValueError as exc:
        raise DecryptionError(f"could not decrypt search results: {exc}") from exc

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecryptionError(f"decrypted search results are not UTF-8: {exc}") from exc


def repair_fragment(text: str) -> str:
    """Undo the JS-string escaping and check the result is a listing fragment."""
    for escaped, plain in _ESCAPES:
        text = text.replace(escaped, plain)
    text = text.strip()
    if not text:
        raise FragmentRepairError("decrypted search fragment is empty")
    if not text.startswith("<"):
        raise FragmentRepairError(
            f"decrypted search fragment does not start with markup: {text[:20]!r}"
        )
    if not _CONTAINER_MARKER_RE.search(text):
        raise FragmentRepairError("decrypted search fragment has no listing container")
    return text


def parse_search_fragment(markup: str, base_url: Optional[str] = None) -> List[DeviceSummary]:
    soup = make_soup(markup)
    if select_one(soup, LISTING_CONTAINER) is None:
        raise StructuralParseError("listing container not found in decrypted search fragment")
    return read_listing(soup, base_url=base_url)


def decode_search_page(soup, base_url: Optional[str] = None) -> List[DeviceSummary]:
    params = find_cipher_params(soup)
    fragment = repair_fragment(decrypt_payload(params))
    results = parse_search_fragment(fragment, base_url=base_url)
    logger.debug("Decoded %d search results", len(results))
    return results
