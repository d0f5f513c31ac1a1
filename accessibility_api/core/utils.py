import re
from typing import Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

from .errors import AuditError, ErrorKind

_http_url = TypeAdapter(HttpUrl)
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def is_blank(url: Optional[str]) -> bool:
    return not isinstance(url, str) or not url.strip()


def normalize_url(url: str) -> str:
    """Return an absolute http(s) URL or raise a validation AuditError.

    Scheme-less input ("example.com") is treated as http, the way a browser
    address bar would.
    """
    candidate = url.strip()
    if not _SCHEME.match(candidate):
        candidate = "http://" + candidate
    try:
        _http_url.validate_python(candidate)
    except ValidationError as e:
        raise AuditError(ErrorKind.VALIDATION, f"invalid url {url!r}: {e.errors()[0]['msg']}") from e
    # HttpUrl appends "/" to bare hosts, keep the caller's form
    return candidate
