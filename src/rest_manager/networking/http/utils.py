from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlencode


def assemble_url(resource: str, payload: Mapping[str, Any]) -> str:
    """Append payload to resource as a query string; an empty payload leaves it untouched."""
    if not payload:
        return resource
    separator = '&' if '?' in resource else '?'
    return f"{resource}{separator}{urlencode(payload, doseq=True)}"


def query_params(payload: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """
    Flatten payload to (key, value) string pairs for a query string.

    None values are dropped and sequences repeat their key, matching what
    requests sends for the same mapping.
    """
    params = []
    for key, value in payload.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        params.extend((str(key), str(item)) for item in values if item is not None)
    return params


def decode_body(body: bytes, charset: Optional[str] = None) -> str:
    """Decode a response body, replacing bytes that are invalid for its charset."""
    try:
        return body.decode(charset or 'utf-8', errors='replace')
    except LookupError:
        return body.decode('utf-8', errors='replace')
