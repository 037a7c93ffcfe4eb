import json
import sys
from typing import Any

_DEFAULT_ERRORS = "backslashreplace"


def _get_encoding(stream) -> str:
    return getattr(stream, "encoding", None) or "utf-8"


def safe_str(x: Any, encoding: str | None = None, errors: str = _DEFAULT_ERRORS) -> str:
    if isinstance(x, bytes):
        return x.decode(encoding or "utf-8", errors=errors)

    s = str(x)
    enc = encoding or _get_encoding(sys.stdout)
    try:
        s.encode(enc)
        return s
    except (UnicodeEncodeError, LookupError):
        return s.encode("utf-8", errors=errors).decode("utf-8", errors=errors)


def safe_print(*args: Any, sep: str = " ", end: str = "\n", file=None) -> None:
    """print() that never dies on characters the console cannot encode."""
    file = file or sys.stdout
    encoding = _get_encoding(file)
    text = sep.join(safe_str(arg, encoding=encoding) for arg in args) + end
    try:
        file.write(text)
    except UnicodeEncodeError:
        file.write(text.encode(encoding, errors=_DEFAULT_ERRORS).decode(encoding, errors=_DEFAULT_ERRORS))


def print_json(payload: Any, file=None) -> None:
    safe_print(json.dumps(payload, ensure_ascii=False, indent=2), file=file)
