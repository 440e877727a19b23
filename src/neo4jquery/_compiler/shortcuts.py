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
"""Single-statement plans for the most common writes and lookups."""


from __future__ import annotations

import typing as t

from pydantic import BaseModel

from ..exceptions import GrammarError
from .clause import (
    Create,
    Match,
    Merge,
    Return,
    Where,
)
from .cmp import to_filter
from .expr import (
    Assignment,
    Param,
)
from .func import element_id
from .pattern import (
    Node,
    Relationship,
)
from .plan import QueryPlan


__all__ = [
    "create_node",
    "merge_node",
    "relate",
    "find_nodes",
]


Properties = t.Union[t.Mapping[str, t.Any], BaseModel, None]


def _properties(value: Properties) -> t.Dict[str, t.Any]:
    if value is None:
        return {}
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, t.Mapping):
        return dict(value)
    raise GrammarError(
        f"Expected a mapping or a pydantic model, got {type(value).__name__}"
    )


def _assignments(node: Node, properties: Properties) -> t.List[Assignment]:
    return [
        Assignment(node.attr(k), Param(value=v, hint=k))
        for k, v in _properties(properties).items()
    ]


def create_node(
    label: str,
    properties: Properties = None,
    *,
    variable: str = "n",
) -> QueryPlan:
    """``CREATE (n:Label {k: $k, ...}) RETURN n``"""
    node = Node(variable, label, _properties(properties))
    return QueryPlan((Create(node), Return(node)))


def merge_node(
    label: str,
    match: Properties,
    on_create: Properties = None,
    on_match: Properties = None,
    *,
    variable: str = "n",
) -> QueryPlan:
    """``MERGE (n:Label {k: $k}) [ON CREATE SET ...] [ON MATCH SET ...]
    RETURN n``"""
    match_properties = _properties(match)
    if not match_properties:
        raise GrammarError("MERGE requires at least one property to match on.")
    node = Node(variable, label, match_properties)
    merge = Merge(
        node,
        on_create=_assignments(node, on_create) or None,
        on_match=_assignments(node, on_match) or None,
    )
    return QueryPlan((merge, Return(node)))


def relate(
    start_id: str,
    rel_type: str,
    end_id: str,
    properties: Properties = None,
) -> QueryPlan:
    """Connect two existing nodes, identified by their element ids.

    ``MATCH (a), (b) WHERE elementId(a) = $__start_id AND
    elementId(b) = $__end_id CREATE (a)-[r:TYPE {...}]->(b) RETURN r``
    """
    a = Node("a")
    b = Node("b")
    r = Relationship("r", rel_type, properties=_properties(properties))
    return QueryPlan((
        Match(a, b),
        Where(element_id(a.ref()) == Param("__start_id", start_id),
              element_id(b.ref()) == Param("__end_id", end_id)),
        Create(a >> r >> b),
        Return(r),
    ))


def find_nodes(
    label: str,
    filters: t.Optional[t.Mapping[str, t.Any]] = None,
    **kwargs: t.Any,
) -> QueryPlan:
    """``MATCH (n:Label) [WHERE ...] RETURN n``.

    Filter values are comparators from :mod:`neo4jquery.cmp` or plain values,
    which compare for equality::

        find_nodes("Person", age=cmp.ge(18), name="Alice")
        # MATCH (n:Person) WHERE n.age >= $age AND n.name = $name RETURN n
    """
    node = Node("n", label)
    conditions = [
        to_filter(node.attr(k), v)
        for k, v in {**(filters or {}), **kwargs}.items()
    ]
    clauses: t.List[t.Any] = [Match(node)]
    if conditions:
        clauses.append(Where(*conditions))
    clauses.append(Return(node))
    return QueryPlan(clauses)
