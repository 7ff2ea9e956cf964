from typing import Any

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

ALLOWED_SCHEMES = ("http", "https")

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def is_valid_http_url(value: Any) -> bool:
    """
    Return True only for absolute http:// or https:// URLs.

    Purely syntactic: no DNS lookup and no network access.
    """
    if not isinstance(value, str) or not value.strip():
        return False

    try:
        url = _HTTP_URL.validate_python(value)
    except ValidationError:
        return False

    return url.scheme in ALLOWED_SCHEMES and bool(url.host)
