# Copyright (c) "Neo4j"
# Neo4j Sweden AB [https://neo4j.com]
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


from __future__ import annotations

import math
import numbers
import typing as t

from ..exceptions import GrammarError
from .base import escape_identifier


__all__ = [
    "format_literal",
    "escape_string",
]


def escape_string(value: str) -> str:
    """Escape a string for a single-quoted Cypher literal.

    Only backslashes and single quotes are escaped. Every other character,
    including newlines and multi-byte characters, is passed through.
    """
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise GrammarError(f"Cannot render {value!r} as a Cypher literal")
    # Cypher exponents take no explicit plus sign
    return repr(value).replace("e+", "e")


def format_literal(value: t.Any) -> str:
    """Render a Python value as Cypher literal text.

    ``None`` becomes ``null``, booleans become ``true``/``false``, numbers
    use their canonical decimal form, strings are single-quoted and escaped,
    lists and tuples are rendered element-wise and string-keyed dicts become
    map literals.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        return _format_float(float(value))
    if isinstance(value, str):
        return f"'{escape_string(value)}'"
    if isinstance(value, (list, tuple)):
        items = ", ".join(format_literal(item) for item in value)
        return f"[{items}]"
    if isinstance(value, dict):
        entries = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise GrammarError(
                    f"Map literal keys must be str, got {type(key).__name__}"
                )
            entries.append(f"{escape_identifier(key)}: {format_literal(item)}")
        return f"{{{', '.join(entries)}}}"
    raise GrammarError(
        f"Cannot render value of type {type(value).__name__} as a Cypher "
        f"literal"
    )
