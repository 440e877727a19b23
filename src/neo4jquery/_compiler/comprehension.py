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
    Match,
    Return,
    Where,
)
from .expr import Var
from .pattern import Node
from .plan import QueryPlan


__all__ = [
    "comprehension",
]


_Part = t.Union[t.Any, t.Callable[[Var], t.Any]]


def _resolve(part: _Part, var: Var) -> t.Any:
    if callable(part):
        return part(var)
    return part


def comprehension(
    variable: t.Union[Var, str],
    label: str,
    where: t.Optional[_Part] = None,
    ret: t.Optional[_Part] = None,
) -> QueryPlan:
    """Plan for ``[ret for variable in label if where]``.

    ``where`` and ``ret`` are either expressions or callables that receive
    the bound variable::

        comprehension("p", "Person",
                      where=lambda p: p.attr("age") > 25,
                      ret=lambda p: p.attr("name"))
        # MATCH (p:Person) WHERE p.age > 25 RETURN p.name

    Without ``ret`` the variable itself is returned.
    """
    node = Node(variable, label)
    var = node.ref()
    clauses: t.List[t.Any] = [Match(node)]
    if where is not None:
        clauses.append(Where(_resolve(where, var)))
    if ret is None:
        clauses.append(Return(var))
    else:
        returned = _resolve(ret, var)
        if isinstance(returned, (list, tuple)):
            clauses.append(Return(*returned))
        else:
            clauses.append(Return(returned))
    return QueryPlan(clauses)
