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

import re
import typing as t

from ..api import WRITE_ACCESS
from ..exceptions import ParameterError
from .access_mode import check_access_mode
from .base import CompiledQuery
from .log import log


__all__ = [
    "cypher",
    "parameter_names",
]


_PARAMETER_REFERENCE = re.compile(r"\\?\$([a-zA-Z_][a-zA-Z0-9_]*)")
_ESCAPED_DOLLAR = re.compile(r"\\\$")


def parameter_names(statement: str) -> t.List[str]:
    """Names referenced as ``$name`` (or ``\\$name``), first-seen order."""
    names: t.Dict[str, None] = {}
    for match in _PARAMETER_REFERENCE.finditer(statement):
        names.setdefault(match.group(1), None)
    return list(names)


def cypher(
    statement: str,
    parameters: t.Optional[t.Mapping[str, t.Any]] = None,
    *,
    access_mode: t.Optional[str] = None,
    **kwargs: t.Any,
) -> CompiledQuery:
    """Bind the ``$name`` references of a hand-written statement.

    Values are looked up in ``parameters`` and then in ``kwargs``; only the
    referenced names end up in the result. A backslash in front of ``$`` is
    stripped. The statement is not analysed, so the access mode is ``WRITE``
    unless given.

    >>> cypher("MATCH (n:Person {name: $name}) RETURN n", name="Alice")
    CompiledQuery(query='MATCH (n:Person {name: $name}) RETURN n', \
parameters={'name': 'Alice'}, access_mode='WRITE')
    """
    values: t.Dict[str, t.Any] = dict(parameters or {})
    values.update(kwargs)
    bound: t.Dict[str, t.Any] = {}
    for name in parameter_names(statement):
        if name not in values:
            raise ParameterError(f"No value supplied for parameter ${name}")
        bound[name] = values[name]
    query = _ESCAPED_DOLLAR.sub("$", statement)
    mode = check_access_mode(access_mode) or WRITE_ACCESS
    log.debug("Bound statement (%s):\n%s\nparameters: %s",
              mode, query, list(bound))
    return CompiledQuery(query, bound, mode)
