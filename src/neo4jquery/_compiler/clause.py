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

import abc
import enum
import typing as t

from ..exceptions import GrammarError
from .base import (
    escape_identifier,
    Part,
)
from .expr import (
    _operand,
    _Precedence,
    Alias,
    Assignment,
    coerce,
    Expr,
    LabelSet,
    Param,
    Property,
    SortItem,
    Star,
    Var,
)
from .literal import format_literal
from .pattern import (
    _Entity,
    Chain,
    compile_pattern,
    Node,
    PathPattern,
    Pattern,
)


if t.TYPE_CHECKING:
    from .param_registry import ParameterRegistry
    from .plan import QueryPlan


__all__ = [
    "ClauseKind",
    "Clause",
    "Match",
    "OptionalMatch",
    "Where",
    "Return",
    "With",
    "Unwind",
    "Create",
    "Merge",
    "Set",
    "OnCreateSet",
    "OnMatchSet",
    "Delete",
    "DetachDelete",
    "Remove",
    "OrderBy",
    "Skip",
    "Limit",
    "Union",
    "UnionAll",
    "Call",
    "LoadCsv",
    "LoadCsvWithHeaders",
    "Foreach",
    "CreateIndex",
    "DropIndex",
    "CreateConstraint",
    "DropConstraint",
    "PatternArg",
    "ProjectionArg",
    "SetArg",
]


PatternArg = t.Union[Node, Pattern, Chain, PathPattern]
ProjectionArg = t.Union[Expr, _Entity, PathPattern, str]
SetArg = t.Union[Assignment, LabelSet, t.Tuple[Expr, t.Any]]

_CALL_VARIABLES_MIN_VERSION = (5, 23)


class ClauseKind(enum.Enum):
    MATCH = "MATCH"
    OPTIONAL_MATCH = "OPTIONAL_MATCH"
    WHERE = "WHERE"
    RETURN = "RETURN"
    WITH = "WITH"
    CREATE = "CREATE"
    MERGE = "MERGE"
    SET = "SET"
    ON_CREATE_SET = "ON_CREATE_SET"
    ON_MATCH_SET = "ON_MATCH_SET"
    DELETE = "DELETE"
    DETACH_DELETE = "DETACH_DELETE"
    REMOVE = "REMOVE"
    ORDER_BY = "ORDER_BY"
    SKIP = "SKIP"
    LIMIT = "LIMIT"
    UNWIND = "UNWIND"
    UNION = "UNION"
    UNION_ALL = "UNION_ALL"
    CALL_SUBQUERY = "CALL_SUBQUERY"
    LOAD_CSV = "LOAD_CSV"
    LOAD_CSV_HEADERS = "LOAD_CSV_HEADERS"
    FOREACH = "FOREACH"
    CREATE_INDEX = "CREATE_INDEX"
    DROP_INDEX = "DROP_INDEX"
    CREATE_CONSTRAINT = "CREATE_CONSTRAINT"
    DROP_CONSTRAINT = "DROP_CONSTRAINT"


MUTATION_KINDS = frozenset((
    ClauseKind.CREATE,
    ClauseKind.MERGE,
    ClauseKind.SET,
    ClauseKind.ON_CREATE_SET,
    ClauseKind.ON_MATCH_SET,
    ClauseKind.DELETE,
    ClauseKind.DETACH_DELETE,
    ClauseKind.REMOVE,
    ClauseKind.CREATE_INDEX,
    ClauseKind.DROP_INDEX,
    ClauseKind.CREATE_CONSTRAINT,
    ClauseKind.DROP_CONSTRAINT,
))

SET_KINDS = frozenset((
    ClauseKind.SET,
    ClauseKind.ON_CREATE_SET,
    ClauseKind.ON_MATCH_SET,
))

FOREACH_BODY_KINDS = frozenset((
    ClauseKind.SET,
    ClauseKind.CREATE,
    ClauseKind.MERGE,
    ClauseKind.DELETE,
    ClauseKind.DETACH_DELETE,
    ClauseKind.REMOVE,
    ClauseKind.FOREACH,
))


def _pattern_arg(pattern: t.Any) -> t.Union[Node, Pattern, PathPattern]:
    if isinstance(pattern, Chain):
        return pattern.pattern()
    if isinstance(pattern, (Node, Pattern, PathPattern)):
        return pattern
    raise GrammarError(
        f"Expected a pattern, got {type(pattern).__name__}"
    )


def _variable_arg(value: t.Any) -> Expr:
    if isinstance(value, str):
        return Star() if value == "*" else Var(value)
    if isinstance(value, (_Entity, PathPattern)):
        return value.ref()
    return coerce(value)


def _variable_name(value: t.Union[Var, str]) -> str:
    if isinstance(value, Var):
        return value.name
    if isinstance(value, str) and value:
        return value
    raise GrammarError(
        f"Expected a variable name, got {value!r}"
    )


def _set_arg(arg: t.Any) -> t.Union[Assignment, LabelSet]:
    if isinstance(arg, (Assignment, LabelSet)):
        return arg
    if isinstance(arg, tuple) and len(arg) == 2:
        return Assignment(*arg)
    raise GrammarError(
        f"Expected an assignment or a label item, got {arg!r}"
    )


def _count_arg(value: t.Any, keyword: str) -> t.Union[int, Param]:
    if isinstance(value, Param):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    raise GrammarError(
        f"{keyword} expects a non-negative int or a parameter, got {value!r}"
    )


class Clause(Part, abc.ABC):
    kind: t.ClassVar[ClauseKind]


class _PatternClause(Clause, abc.ABC):
    _keyword: t.ClassVar[str]
    _patterns: t.Tuple[t.Union[Node, Pattern, PathPattern], ...]

    def __init__(self, *patterns: PatternArg) -> None:
        if not patterns:
            raise GrammarError(
                f"{self._keyword} requires at least one pattern."
            )
        self._patterns = tuple(map(_pattern_arg, patterns))

    @property
    def patterns(self) -> t.Tuple[t.Union[Node, Pattern, PathPattern], ...]:
        return self._patterns

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        patterns = ", ".join(compile_pattern(pattern, param_reg, version)
                             for pattern in self._patterns)
        return f"{self._keyword} {patterns}"


class Match(_PatternClause):
    kind = ClauseKind.MATCH
    _keyword = "MATCH"


class OptionalMatch(_PatternClause):
    kind = ClauseKind.OPTIONAL_MATCH
    _keyword = "OPTIONAL MATCH"


class Create(_PatternClause):
    kind = ClauseKind.CREATE
    _keyword = "CREATE"


class Where(Clause):
    kind = ClauseKind.WHERE
    _conditions: t.Tuple[Expr, ...]

    def __init__(self, *conditions: t.Any) -> None:
        if not conditions:
            raise GrammarError("WHERE requires at least one condition.")
        self._conditions = tuple(map(coerce, conditions))

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        parent = _Precedence.AND if len(self._conditions) > 1 else _Precedence.OR
        conditions = " AND ".join(
            _operand(condition, param_reg, version, parent)
            for condition in self._conditions
        )
        return f"WHERE {conditions}"


class _Projection(Clause, abc.ABC):
    _keyword: t.ClassVar[str]
    _items: t.Tuple[Expr, ...]
    _distinct: bool

    def __init__(self, *items: ProjectionArg, distinct: bool = False) -> None:
        if not items:
            raise GrammarError(
                f"At least one {self._keyword} argument is required."
            )
        self._items = tuple(map(_variable_arg, items))
        self._distinct = distinct

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        items = []
        for item in self._items:
            if isinstance(item, (Alias, Star)):
                items.append(item._to_cypher(param_reg, version))
            else:
                items.append(_operand(item, param_reg, version,
                                      _Precedence.OR))
        distinct = " DISTINCT" if self._distinct else ""
        return f"{self._keyword}{distinct} {', '.join(items)}"


class Return(_Projection):
    kind = ClauseKind.RETURN
    _keyword = "RETURN"


class With(_Projection):
    kind = ClauseKind.WITH
    _keyword = "WITH"


class Unwind(Clause):
    kind = ClauseKind.UNWIND
    _source: Expr
    _alias: str

    def __init__(self, source: t.Any, alias: t.Union[Var, str]) -> None:
        self._source = coerce(source)
        self._alias = _variable_name(alias)

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        source = _operand(self._source, param_reg, version, _Precedence.OR)
        return f"UNWIND {source} AS {escape_identifier(self._alias)}"


class _SetClause(Clause, abc.ABC):
    _keyword: t.ClassVar[str]
    _items: t.Tuple[t.Union[Assignment, LabelSet], ...]

    def __init__(self, *items: SetArg) -> None:
        if not items:
            raise GrammarError("At least one set argument is required.")
        self._items = tuple(map(_set_arg, items))

    def _items_to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> t.List[str]:
        return [item._to_cypher(param_reg, version) for item in self._items]

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        items = self._items_to_cypher(param_reg, version)
        return f"{self._keyword} {', '.join(items)}"


class Set(_SetClause):
    kind = ClauseKind.SET
    _keyword = "SET"


class OnCreateSet(_SetClause):
    kind = ClauseKind.ON_CREATE_SET
    _keyword = "ON CREATE SET"


class OnMatchSet(_SetClause):
    kind = ClauseKind.ON_MATCH_SET
    _keyword = "ON MATCH SET"


class Merge(Clause):
    kind = ClauseKind.MERGE
    _pattern: t.Union[Node, Pattern, PathPattern]
    _on_create: t.Optional[OnCreateSet]
    _on_match: t.Optional[OnMatchSet]

    def __init__(
        self,
        pattern: PatternArg,
        on_create: t.Optional[t.Sequence[SetArg]] = None,
        on_match: t.Optional[t.Sequence[SetArg]] = None,
    ) -> None:
        self._pattern = _pattern_arg(pattern)
        self._on_create = None if on_create is None else OnCreateSet(*on_create)
        self._on_match = None if on_match is None else OnMatchSet(*on_match)

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        parts = [f"MERGE {compile_pattern(self._pattern, param_reg, version)}"]
        if self._on_create is not None:
            parts.append(self._on_create._to_cypher(param_reg, version))
        if self._on_match is not None:
            parts.append(self._on_match._to_cypher(param_reg, version))
        return " ".join(parts)


class _DeleteClause(Clause, abc.ABC):
    _keyword: t.ClassVar[str]
    _targets: t.Tuple[Expr, ...]

    def __init__(self, *targets: ProjectionArg) -> None:
        if not targets:
            raise GrammarError(
                f"{self._keyword} requires at least one target."
            )
        self._targets = tuple(map(_variable_arg, targets))

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        targets = ", ".join(
            _operand(target, param_reg, version, _Precedence.OR)
            for target in self._targets
        )
        return f"{self._keyword} {targets}"


class Delete(_DeleteClause):
    kind = ClauseKind.DELETE
    _keyword = "DELETE"


class DetachDelete(_DeleteClause):
    kind = ClauseKind.DETACH_DELETE
    _keyword = "DETACH DELETE"


class Remove(Clause):
    kind = ClauseKind.REMOVE
    _items: t.Tuple[t.Union[Property, LabelSet], ...]

    def __init__(self, *items: t.Union[Property, LabelSet]) -> None:
        if not items:
            raise GrammarError("REMOVE requires at least one item.")
        for item in items:
            if not isinstance(item, (Property, LabelSet)):
                raise GrammarError(
                    f"REMOVE expects properties or label items, got "
                    f"{type(item).__name__}"
                )
        self._items = items

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        items = ", ".join(item._to_cypher(param_reg, version)
                          for item in self._items)
        return f"REMOVE {items}"


def _sort_arg(item: t.Any) -> SortItem:
    if isinstance(item, SortItem):
        return item
    if isinstance(item, tuple) and len(item) == 2:
        expr, direction = item
        if not isinstance(direction, str) \
                or direction.lower() not in ("asc", "desc"):
            raise GrammarError(
                f"Sort direction must be 'asc' or 'desc', got {direction!r}"
            )
        return SortItem(_variable_arg(expr),
                        descending=direction.lower() == "desc")
    return SortItem(_variable_arg(item))


class OrderBy(Clause):
    kind = ClauseKind.ORDER_BY
    _items: t.Tuple[SortItem, ...]

    def __init__(self, *items: t.Any) -> None:
        if not items:
            raise GrammarError("ORDER BY requires at least one item.")
        self._items = tuple(map(_sort_arg, items))

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        items = ", ".join(item._to_cypher(param_reg, version)
                          for item in self._items)
        return f"ORDER BY {items}"


class _CountClause(Clause, abc.ABC):
    _keyword: t.ClassVar[str]
    _count: t.Union[int, Param]

    def __init__(self, count: t.Union[int, Param]) -> None:
        self._count = _count_arg(count, self._keyword)

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        if isinstance(self._count, Param):
            count = self._count._to_cypher(param_reg, version)
        else:
            count = str(self._count)
        return f"{self._keyword} {count}"


class Skip(_CountClause):
    kind = ClauseKind.SKIP
    _keyword = "SKIP"


class Limit(_CountClause):
    kind = ClauseKind.LIMIT
    _keyword = "LIMIT"


class Union(Clause):
    kind = ClauseKind.UNION

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        return "UNION"


class UnionAll(Clause):
    kind = ClauseKind.UNION_ALL

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        return "UNION ALL"


def _body_plan(body: t.Any, keyword: str) -> QueryPlan:
    from .plan import QueryPlan

    plan = QueryPlan.of(body)
    if not len(plan):
        raise GrammarError(f"{keyword} requires a non-empty body.")
    return plan


class _BodyClause(Clause, abc.ABC):
    """Clause that embeds a nested sequence of clauses."""

    _body: QueryPlan

    def _body_to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
        separator: str,
    ) -> str:
        from .assembler import assemble

        return assemble(self._body, param_reg, version, separator)

    @property
    def body(self) -> QueryPlan:
        return self._body

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
        separator: str = " ",
    ) -> str:
        body = self._body_to_cypher(param_reg, version, separator)
        return self._wrap(body, param_reg, version)

    @abc.abstractmethod
    def _wrap(
        self,
        body: str,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        ...


class Call(_BodyClause):
    """``CALL { ... }`` subquery, optionally with an importing variable
    scope ``CALL (a, b) { ... }``."""

    kind = ClauseKind.CALL_SUBQUERY
    _variables: t.Optional[t.Tuple[str, ...]]

    def __init__(
        self,
        body: t.Any,
        variables: t.Optional[t.Sequence[t.Union[Var, str]]] = None,
    ) -> None:
        self._body = _body_plan(body, "CALL")
        if variables is None:
            self._variables = None
        else:
            self._variables = tuple(map(_variable_name, variables))

    def _wrap(
        self,
        body: str,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        if self._variables is None:
            return f"CALL {{ {body} }}"
        if version < _CALL_VARIABLES_MIN_VERSION:
            raise GrammarError(
                f"Variable scope clauses require Cypher "
                f"{_CALL_VARIABLES_MIN_VERSION[0]}."
                f"{_CALL_VARIABLES_MIN_VERSION[1]} or later"
            )
        variables = ", ".join(map(escape_identifier, self._variables))
        return f"CALL ({variables}) {{ {body} }}"


class Foreach(_BodyClause):
    kind = ClauseKind.FOREACH
    _variable: str
    _source: Expr

    def __init__(
        self,
        variable: t.Union[Var, str],
        source: t.Any,
        body: t.Any,
    ) -> None:
        self._variable = _variable_name(variable)
        self._source = coerce(source)
        self._body = _body_plan(body, "FOREACH")
        for clause in self._body:
            if clause.kind not in FOREACH_BODY_KINDS:
                raise GrammarError(
                    f"Only mutation clauses are allowed in a FOREACH body, "
                    f"got {clause.kind.name}"
                )

    def _wrap(
        self,
        body: str,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        source = _operand(self._source, param_reg, version, _Precedence.OR)
        variable = escape_identifier(self._variable)
        return f"FOREACH ({variable} IN {source} | {body})"


class LoadCsv(Clause):
    kind = ClauseKind.LOAD_CSV
    _keyword: t.ClassVar[str] = "LOAD CSV"
    _url: t.Union[str, Param]
    _alias: str
    _field_terminator: t.Optional[str]

    def __init__(
        self,
        url: t.Union[str, Param],
        alias: t.Union[Var, str] = "row",
        field_terminator: t.Optional[str] = None,
    ) -> None:
        if not isinstance(url, (str, Param)):
            raise GrammarError(
                f"{self._keyword} expects a URL string or a parameter, got "
                f"{type(url).__name__}"
            )
        self._url = url
        self._alias = _variable_name(alias)
        self._field_terminator = field_terminator

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        if isinstance(self._url, Param):
            url = self._url._to_cypher(param_reg, version)
        else:
            url = format_literal(self._url)
        query = (f"{self._keyword} FROM {url} "
                 f"AS {escape_identifier(self._alias)}")
        if self._field_terminator is not None:
            query += f" FIELDTERMINATOR {format_literal(self._field_terminator)}"
        return query


class LoadCsvWithHeaders(LoadCsv):
    kind = ClauseKind.LOAD_CSV_HEADERS
    _keyword = "LOAD CSV WITH HEADERS"


def _names(value: t.Union[str, t.Sequence[str]], what: str) -> t.Tuple[str, ...]:
    names = (value,) if isinstance(value, str) else tuple(value)
    if not names:
        raise GrammarError(f"At least one {what} is required.")
    return names


class CreateIndex(Clause):
    kind = ClauseKind.CREATE_INDEX
    _label: str
    _properties: t.Tuple[str, ...]
    _name: t.Optional[str]

    def __init__(
        self,
        label: str,
        properties: t.Union[str, t.Sequence[str]],
        name: t.Optional[str] = None,
    ) -> None:
        self._label = label
        self._properties = _names(properties, "index property")
        self._name = name

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        name = "" if self._name is None else f" {escape_identifier(self._name)}"
        properties = ", ".join(f"n.{escape_identifier(p)}"
                               for p in self._properties)
        return (f"CREATE INDEX{name} FOR (n:{escape_identifier(self._label)}) "
                f"ON ({properties})")


class CreateConstraint(Clause):
    kind = ClauseKind.CREATE_CONSTRAINT
    _label: str
    _property: str
    _requirement: str
    _name: t.Optional[str]

    _REQUIREMENTS: t.ClassVar[t.Dict[str, str]] = {
        "unique": "IS UNIQUE",
        "not_null": "IS NOT NULL",
        "notnull": "IS NOT NULL",
    }

    def __init__(
        self,
        label: str,
        property_: str,
        type_: str = "unique",
        name: t.Optional[str] = None,
    ) -> None:
        requirement = self._REQUIREMENTS.get(str(type_).lower())
        if requirement is None:
            raise GrammarError(
                f"Unsupported constraint type {type_!r}, expected 'unique' "
                f"or 'not_null'"
            )
        self._label = label
        self._property = property_
        self._requirement = requirement
        self._name = name

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        name = "" if self._name is None else f" {escape_identifier(self._name)}"
        return (
            f"CREATE CONSTRAINT{name} FOR (n:{escape_identifier(self._label)}) "
            f"REQUIRE n.{escape_identifier(self._property)} "
            f"{self._requirement}"
        )


class _DropSchemaClause(Clause, abc.ABC):
    _keyword: t.ClassVar[str]
    _name: str

    def __init__(self, name: str) -> None:
        if not isinstance(name, str) or not name:
            raise GrammarError(f"{self._keyword} requires a name.")
        self._name = name

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        return f"{self._keyword} {escape_identifier(self._name)} IF EXISTS"


class DropIndex(_DropSchemaClause):
    kind = ClauseKind.DROP_INDEX
    _keyword = "DROP INDEX"


class DropConstraint(_DropSchemaClause):
    kind = ClauseKind.DROP_CONSTRAINT
    _keyword = "DROP CONSTRAINT"
