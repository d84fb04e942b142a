"""
HTTP Networking Utilities
"""

from typing import Any, Mapping, Optional
from urllib.parse import urlencode


def build_query_string(params: Optional[Mapping[str, Any]]) -> str:
    """
    Build a query string with a leading '?' from request parameters.

    Empty values are dropped and keys are sorted, so the same parameters
    always produce the same signed path. Returns '' when nothing remains.
    """
    if not params:
        return ""

    values = []
    for key in sorted(params):
        value = params[key]
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        values.append((key, value))

    if not values:
        return ""
    return "?" + urlencode(values)
