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
from .base import check_function_name
from .expr import (
    _operand,
    _Precedence,
    coerce,
    Expr,
    Star,
)


if t.TYPE_CHECKING:
    from .param_registry import ParameterRegistry


__all__ = [
    "Func",
    "count",
    "collect",
    "size",
    "coalesce",
    "element_id",
    "labels",
    "type_",
]


class Func(Expr):
    """Function call ``name(arg, ...)``, optionally ``name(DISTINCT arg)``."""

    _name: str
    _args: t.Tuple[Expr, ...]
    _distinct: bool

    def __init__(self, name: str, *args: t.Any, distinct: bool = False) -> None:
        check_function_name(name)
        self._name = name
        self._args = tuple(map(coerce, args))
        self._distinct = distinct

    def __repr__(self) -> str:
        return f"Func({self._name!r}, *{self._args!r})"

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        args = []
        for arg in self._args:
            if isinstance(arg, Star):
                if self._name.lower() != "count" or len(self._args) != 1:
                    raise GrammarError("* is only allowed in count(*)")
                args.append("*")
                continue
            args.append(_operand(arg, param_reg, version, _Precedence.OR))
        if self._distinct:
            if not args:
                raise GrammarError(
                    f"{self._name}(DISTINCT) requires an argument"
                )
            return f"{self._name}(DISTINCT {', '.join(args)})"
        return f"{self._name}({', '.join(args)})"


def count(expr: t.Any = None, *, distinct: bool = False) -> Func:
    if expr is None:
        expr = Star()
    return Func("count", expr, distinct=distinct)


def collect(expr: t.Any, *, distinct: bool = False) -> Func:
    return Func("collect", expr, distinct=distinct)


def size(expr: t.Any) -> Func:
    return Func("size", expr)


def coalesce(*exprs: t.Any) -> Func:
    return Func("coalesce", *exprs)


def element_id(expr: t.Any) -> Func:
    return Func("elementId", expr)


def labels(expr: t.Any) -> Func:
    return Func("labels", expr)


def type_(expr: t.Any) -> Func:
    return Func("type", expr)
