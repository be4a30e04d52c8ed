from __future__ import annotations

import json
import math
import re
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Union

_INT_RE = re.compile(r"^[-+]?(0|[1-9]\d*)$")
_FLOAT_RE = re.compile(r"^[-+]?(0|[1-9]\d*)?\.\d+([eE][-+]?\d+)?$|^[-+]?(0|[1-9]\d*)[eE][-+]?\d+$")

TEXT_KEY = "#text"


def _coerce_scalar(text: str) -> Union[str, int, float]:
    # Leading zeros (zip codes, phone fragments) are kept as strings, and so is
    # anything that is not a finite JSON number.
    try:
        if _INT_RE.match(text):
            return int(text)
        if _FLOAT_RE.match(text):
            value = float(text)
            return value if math.isfinite(value) else text
    except ValueError:
        # int() refuses digit strings past the interpreter's conversion limit
        return text
    return text


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def _element_to_value(element: ET.Element) -> Any:
    node: Dict[str, Any] = {
        _local_name(name): _coerce_scalar(value.strip()) for name, value in element.attrib.items()
    }

    for child in element:
        key = _local_name(child.tag)
        value = _element_to_value(child)
        if key in node:
            existing = node[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                node[key] = [existing, value]
        else:
            node[key] = value

    text = (element.text or "").strip()
    if not node:
        return _coerce_scalar(text) if text else ""
    if text:
        node[TEXT_KEY] = _coerce_scalar(text)
    return node


def xml_to_dict(xml_string: str) -> Dict[str, Any]:
    root = ET.fromstring(xml_string)
    return {_local_name(root.tag): _element_to_value(root)}


def xml_to_dict_safe(xml_string: str) -> Dict[str, Any]:
    """Parse YGL XML into nested dicts; anything unparseable comes back as ``{"raw": ...}``."""
    try:
        return xml_to_dict(xml_string)
    except (ET.ParseError, ValueError):
        return {"raw": xml_string}


def _decode_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return text


def normalize_upstream_body(content_type: str, text: str) -> Any:
    """
    Turn a YGL response body into JSON-ready data.

    XML (by content type, or any body that is not JSON) is parsed into a
    tree; decoded JSON is passed through unchanged.
    """
    if "xml" in (content_type or "").lower():
        return xml_to_dict_safe(text)
    data = _decode_json(text)
    if isinstance(data, str):
        return xml_to_dict_safe(data)
    return data


def upstream_error_details(text: str) -> Union[Dict[str, Any], List[Any], str, None]:
    if not text:
        return None
    return _decode_json(text)
