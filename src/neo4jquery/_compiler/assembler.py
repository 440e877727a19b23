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

import typing as t

from .clause import (
    _BodyClause,
    _SetClause,
    Clause,
)


if t.TYPE_CHECKING:
    from .param_registry import ParameterRegistry


__all__ = [
    "assemble",
]


def _compile_clause(
    clause: Clause,
    param_reg: ParameterRegistry,
    version: t.Tuple[int, int],
    separator: str,
) -> str:
    if isinstance(clause, _BodyClause):
        return clause._to_cypher(param_reg, version, separator)
    return clause._to_cypher(param_reg, version)


def assemble(
    clauses: t.Iterable[Clause],
    param_reg: ParameterRegistry,
    version: t.Tuple[int, int],
    separator: str = " ",
) -> str:
    """Compile clauses in order and join the fragments.

    Consecutive SET clauses of the same kind are coalesced into a single
    fragment; a pending SET is flushed before the next clause of any other
    kind and at the end.
    """
    fragments: t.List[str] = []
    pending: t.Optional[_SetClause] = None
    pending_items: t.List[str] = []

    def flush() -> None:
        nonlocal pending
        if pending is not None:
            fragments.append(f"{pending._keyword} {', '.join(pending_items)}")
            pending = None
            pending_items.clear()

    for clause in clauses:
        if isinstance(clause, _SetClause):
            if pending is not None and pending.kind != clause.kind:
                flush()
            if pending is None:
                pending = clause
            pending_items.extend(clause._items_to_cypher(param_reg, version))
            continue
        flush()
        fragments.append(_compile_clause(clause, param_reg, version, separator))
    flush()
    return separator.join(fragments)
