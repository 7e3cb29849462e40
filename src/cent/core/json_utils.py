#!/usr/bin/env python3
"""
JSON Utilities Module

Consistent JSON rendering for cent values. Money, ScaledDecimal, Rational and
ExchangeRate objects all expose ``to_json()``; ``json_default`` lets them be
embedded directly in larger structures passed to ``format_json``.
"""

import json
from typing import Any


def json_default(value: Any) -> Any:
    """
    Serializer hook for json.dumps handling cent value objects.

    Raises:
        TypeError: If value has no JSON form (json.dumps contract)
    """
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return to_json()
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_json(data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> str:
    """
    Format data as a pretty-printed JSON string.

    Args:
        data: Data to format (may contain cent value objects)
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(data, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys, default=json_default)


def parse_json(text: str) -> Any:
    """
    Parse a JSON document.

    Args:
        text: JSON text

    Returns:
        The parsed JSON data
    """
    return json.loads(text)
