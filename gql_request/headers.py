"""
Header normalization for gql_request.

Headers may be given as a multi-value header collection (``CIMultiDict``,
``CIMultiDictProxy`` or anything else exposing ``getall``), as a plain
mapping, or as an iterable of ``(name, value)`` pairs. They are all resolved
to a plain dict before being merged.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from multidict import CIMultiDict

from .models import HeadersInit


def _is_multi_mapping(headers: Any) -> bool:
    return isinstance(headers, Mapping) and callable(getattr(headers, "getall", None))


def resolve_headers(headers: Optional[HeadersInit]) -> Dict[str, str]:
    """
    Convert a header set of any accepted shape into a plain dict.

    Args:
        headers: Header collection, mapping, iterable of pairs or None

    Returns:
        Dictionary of header names to values

    Raises:
        TypeError: If headers is a string or contains malformed pairs
    """
    if headers is None:
        return {}

    if _is_multi_mapping(headers):
        resolved: Dict[str, str] = {}
        seen = set()
        for name in headers.keys():
            if name.lower() not in seen:
                seen.add(name.lower())
                resolved[name] = ", ".join(str(v) for v in headers.getall(name))
        return resolved

    if isinstance(headers, Mapping):
        return dict(headers)

    if isinstance(headers, (str, bytes)):
        raise TypeError("headers must be a mapping or an iterable of (name, value) pairs")

    resolved = {}
    for pair in headers:
        if isinstance(pair, (str, bytes)) or len(pair) != 2:
            raise TypeError(f"Invalid header pair: {pair!r}")
        name, value = pair
        resolved[name] = value
    return resolved


def merge_headers(*sources: Optional[HeadersInit]) -> CIMultiDict:
    """
    Merge header sets in order, later sources overriding earlier ones.

    Names are compared case-insensitively, so ``x-token`` given per call
    replaces a default ``X-Token``.
    """
    merged: CIMultiDict = CIMultiDict()
    for source in sources:
        for name, value in resolve_headers(source).items():
            merged[name] = value
    return merged


def own_headers(headers: Optional[HeadersInit]) -> Optional[HeadersInit]:
    """
    Copy a header set so it can be stored and reused across requests.

    Plain dicts are copied, so later updates never reach the caller's dict.
    Pairs are materialized into a tuple, so a generator is not exhausted by
    the first request. Header collections are kept as given.
    """
    if headers is None or isinstance(headers, Mapping):
        return dict(headers) if type(headers) is dict else headers
    if isinstance(headers, (str, bytes)):
        raise TypeError("headers must be a mapping or an iterable of (name, value) pairs")
    return tuple(headers)


def is_mutable_mapping(headers: Any) -> bool:
    """Whether a stored header set can take a single header assignment."""
    return isinstance(headers, Mapping) and hasattr(headers, "__setitem__")


def set_header_value(headers: Any, name: str, value: str) -> None:
    """Set one header in a mutable mapping, replacing it under any casing."""
    for existing in [key for key in headers if key.lower() == name.lower()]:
        # a CIMultiDict drops every casing on the first del
        if existing in headers:
            del headers[existing]
    headers[name] = value
