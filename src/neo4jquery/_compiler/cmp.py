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
from dataclasses import dataclass

from .expr import (
    BinaryExpr,
    BinaryOp,
    Expr,
    Param,
    Property,
)


__all__ = [
    "eq",
    "ne",
    "lt",
    "le",
    "gt",
    "ge",
    "contains",
    "starts_with",
    "ends_with",
    "in_",
    "to_filter",
]


@dataclass
class _Cmp:
    _op: BinaryOp
    _value: t.Any

    def to_filter(self, e: Property) -> Expr:
        if isinstance(self._value, Expr):
            value = self._value
        else:
            value = Param(value=self._value, hint=e._name)
        return BinaryExpr(e, self._op, value)


def to_filter(e: Property, value: t.Any) -> Expr:
    """Filter for ``e`` given a comparator or, for equality, a plain value."""
    if not isinstance(value, _Cmp):
        value = eq(value)
    return value.to_filter(e)


def eq(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.EQ, value)


def ne(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.NE, value)


def lt(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.LT, value)


def le(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.LE, value)


def gt(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.GT, value)


def ge(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.GE, value)


def contains(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.CONTAINS, value)


def starts_with(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.STARTS_WITH, value)


def ends_with(value: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.ENDS_WITH, value)


def in_(values: t.Any) -> _Cmp:
    return _Cmp(BinaryOp.IN, values)
