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

from ..exceptions import GrammarError
from .clause import Clause


__all__ = [
    "QueryPlan",
]


class QueryPlan:
    """Immutable, ordered sequence of clauses.

    This is the only input the compiler consumes; every front-end (the fluent
    :class:`~neo4jquery.Query`, comprehensions, shortcuts) produces one.
    """

    _clauses: t.Tuple[Clause, ...]

    def __init__(self, clauses: t.Iterable[Clause] = ()) -> None:
        clauses = tuple(clauses)
        for clause in clauses:
            if not isinstance(clause, Clause):
                raise GrammarError(
                    f"Query plans consist of clauses, got "
                    f"{type(clause).__name__}"
                )
        self._clauses = clauses

    @classmethod
    def of(cls, value: t.Any) -> QueryPlan:
        if isinstance(value, QueryPlan):
            return value
        if isinstance(value, Clause):
            return cls((value,))
        plan = getattr(value, "plan", None)
        if callable(plan):
            return QueryPlan.of(plan())
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            raise GrammarError(
                f"Cannot build a query plan from {type(value).__name__}"
            )
        return cls(value)

    @property
    def clauses(self) -> t.Tuple[Clause, ...]:
        return self._clauses

    def __iter__(self) -> t.Iterator[Clause]:
        return iter(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    def __add__(self, other: t.Any) -> QueryPlan:
        return QueryPlan(self._clauses + QueryPlan.of(other)._clauses)

    def __repr__(self) -> str:
        kinds = ", ".join(clause.kind.name for clause in self._clauses)
        return f"QueryPlan({kinds})"
