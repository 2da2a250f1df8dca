"""
Tolerant decoding of stored opinion-question options.

Options are an ordered list of (label, value) pairs. Depending on how a row
was written they come back from storage as a native list, as JSON text, as a
PostgreSQL array literal or as a delimited ``label:value`` string. All of them
decode to the same list of :class:`OpinionOption`.
"""

import csv
import json
import math
import re
from collections.abc import Mapping, Sequence
from typing import Any, List, Optional

from common_sense.schemas.preferences.preference_base import OpinionOption

# unbraced text only; labels containing these need the JSON or array-literal forms
_ENTRY_SEPARATORS = re.compile(r"[|;,\n]")


def parse_opinion_options(value: Any) -> List[OpinionOption]:
    if value is None:
        return []

    if isinstance(value, str):
        return _parse_text(value)

    if isinstance(value, Sequence):
        options = []
        for item in value:
            option = _parse_item(item)
            if option is not None:
                options.append(option)
        return options

    return []


def _parse_text(text: str) -> List[OpinionOption]:
    text = text.strip()
    if not text:
        return []

    try:
        decoded = json.loads(text)
    except ValueError:
        decoded = None
    else:
        if isinstance(decoded, Mapping):
            return parse_opinion_options([decoded])
        if isinstance(decoded, (list, str)) and decoded != text:
            return parse_opinion_options(decoded)

    if text.startswith("{") and text.endswith("}"):
        return parse_opinion_options(_split_array_literal(text[1:-1]))

    return parse_opinion_options([entry for entry in _ENTRY_SEPARATORS.split(text) if entry.strip()])


def _split_array_literal(inner: str) -> List[str]:
    if not inner.strip():
        return []
    reader = csv.reader([inner], skipinitialspace=True, escapechar="\\", doublequote=False)
    return next(reader)


def _parse_item(item: Any) -> Optional[OpinionOption]:
    if isinstance(item, Mapping):
        label = item.get("label")
        number = _to_number(item.get("value"))
        if isinstance(label, str) and label.strip() and number is not None:
            return OpinionOption(label=label.strip(), value=number)
        return None

    if isinstance(item, str):
        entry = item.strip()
        if entry.startswith("{"):
            try:
                return _parse_item(json.loads(entry))
            except ValueError:
                return None
        return _parse_entry(entry)

    if isinstance(item, Sequence) and len(item) == 2:
        label, raw_value = item
        number = _to_number(raw_value)
        if isinstance(label, str) and label.strip() and number is not None:
            return OpinionOption(label=label.strip(), value=number)

    return None


def _parse_entry(entry: str) -> Optional[OpinionOption]:
    # the value follows the last separator, labels may contain ':'
    for separator in (":", "="):
        label, found, raw_value = entry.rpartition(separator)
        if found:
            number = _to_number(raw_value)
            if label.strip() and number is not None:
                return OpinionOption(label=label.strip(), value=number)
    return None


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number
