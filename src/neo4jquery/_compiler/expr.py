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


"""Expression trees and their compilation to Cypher expression text.

Every node of the tree is an :class:`Expr`. Python operators on expressions
build new trees instead of evaluating anything::

    p = Var("p")
    cond = (p.attr("age") > Param("min_age", 30)) | p.attr("admin")
    # -> (p.age > $min_age OR p.admin)

``and``, ``or`` and ``not`` cannot be overloaded, so ``&``, ``|`` and ``~``
stand in for them. Mind Python's precedence: comparisons have to be
parenthesised when combined with ``&`` or ``|``.
"""


from __future__ import annotations

import abc
import enum
import numbers
import typing as t

from ..exceptions import GrammarError
from .base import (
    escape_identifier,
    Part,
)
from .literal import format_literal
from .param_registry import UNSET


if t.TYPE_CHECKING:
    import typing_extensions as te

    from .param_registry import ParameterRegistry


__all__ = [
    "UnaryOp",
    "BinaryOp",
    "Expr",
    "Literal",
    "Var",
    "Property",
    "Param",
    "ListExpr",
    "MapExpr",
    "UnaryExpr",
    "BinaryExpr",
    "Alias",
    "Star",
    "Case",
    "Exists",
    "SortItem",
    "Assignment",
    "LabelSet",
    "coerce",
]


class _Precedence(enum.IntEnum):
    OR = 1
    XOR = 2
    AND = 3
    NOT = 4
    COMPARISON = 5
    PREDICATE = 6
    ADDITIVE = 7
    MULTIPLICATIVE = 8
    POWER = 9
    UNARY = 10
    ATOM = 11


class UnaryOp(enum.Enum):
    NOT = "NOT"
    IS_NULL = "IS_NULL"
    IS_NOT_NULL = "IS_NOT_NULL"
    NEG = "NEG"

    _TRANSLATION: t.ClassVar[t.Dict[UnaryOp, str]]

    @classmethod
    def _translation(cls, version: t.Tuple[int, int]) -> t.Dict[UnaryOp, str]:
        translation = getattr(cls, "_TRANSLATION", None)
        if translation is None:
            cls._TRANSLATION = {
                cls.NOT: "NOT",
                cls.IS_NULL: "IS NULL",
                cls.IS_NOT_NULL: "IS NOT NULL",
                cls.NEG: "-",
            }
        return cls._TRANSLATION  # type: ignore[return-value]

    def _to_cypher(self, version: t.Tuple[int, int]) -> str:
        return self._translation(version)[self]


class BinaryOp(enum.Enum):
    EQ = "EQ"
    NE = "NE"
    LT = "LT"
    LE = "LE"
    GT = "GT"
    GE = "GE"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    CONTAINS = "CONTAINS"
    IN = "IN"
    REGEX = "REGEX"
    AND = "AND"
    OR = "OR"
    XOR = "XOR"
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    MODULO = "%"
    POWER = "^"

    _TRANSLATION: t.ClassVar[t.Dict[BinaryOp, str]]

    @classmethod
    def _translation(cls, version: t.Tuple[int, int]) -> t.Dict[BinaryOp, str]:
        translation = getattr(cls, "_TRANSLATION", None)
        if translation is None:
            cls._TRANSLATION = {
                cls.EQ: "=",
                cls.NE: "<>",
                cls.LT: "<",
                cls.LE: "<=",
                cls.GT: ">",
                cls.GE: ">=",
                cls.STARTS_WITH: "STARTS WITH",
                cls.ENDS_WITH: "ENDS WITH",
                cls.CONTAINS: "CONTAINS",
                cls.IN: "IN",
                cls.REGEX: "=~",
                cls.AND: "AND",
                cls.OR: "OR",
                cls.XOR: "XOR",
                cls.PLUS: "+",
                cls.MINUS: "-",
                cls.TIMES: "*",
                cls.DIVIDE: "/",
                cls.MODULO: "%",
                cls.POWER: "^",
            }
        return cls._TRANSLATION  # type: ignore[return-value]

    def _to_cypher(self, version: t.Tuple[int, int]) -> str:
        return self._translation(version)[self]

    @property
    def _precedence(self) -> _Precedence:
        return _BINARY_PRECEDENCE[self]


_BINARY_PRECEDENCE: t.Dict[BinaryOp, _Precedence] = {
    BinaryOp.EQ: _Precedence.COMPARISON,
    BinaryOp.NE: _Precedence.COMPARISON,
    BinaryOp.LT: _Precedence.COMPARISON,
    BinaryOp.LE: _Precedence.COMPARISON,
    BinaryOp.GT: _Precedence.COMPARISON,
    BinaryOp.GE: _Precedence.COMPARISON,
    BinaryOp.STARTS_WITH: _Precedence.PREDICATE,
    BinaryOp.ENDS_WITH: _Precedence.PREDICATE,
    BinaryOp.CONTAINS: _Precedence.PREDICATE,
    BinaryOp.IN: _Precedence.PREDICATE,
    BinaryOp.REGEX: _Precedence.PREDICATE,
    BinaryOp.AND: _Precedence.AND,
    BinaryOp.OR: _Precedence.OR,
    BinaryOp.XOR: _Precedence.XOR,
    BinaryOp.PLUS: _Precedence.ADDITIVE,
    BinaryOp.MINUS: _Precedence.ADDITIVE,
    BinaryOp.TIMES: _Precedence.MULTIPLICATIVE,
    BinaryOp.DIVIDE: _Precedence.MULTIPLICATIVE,
    BinaryOp.MODULO: _Precedence.MULTIPLICATIVE,
    BinaryOp.POWER: _Precedence.POWER,
}

# operators for which ``a op b op c`` means ``(a op b) op c``
_LEFT_ASSOCIATIVE = frozenset((
    BinaryOp.AND,
    BinaryOp.XOR,
    BinaryOp.PLUS,
    BinaryOp.MINUS,
    BinaryOp.TIMES,
    BinaryOp.DIVIDE,
    BinaryOp.MODULO,
))
# operators for which ``a op (b op c)`` means ``(a op b) op c``
_FULLY_ASSOCIATIVE = frozenset((
    BinaryOp.AND,
    BinaryOp.XOR,
    BinaryOp.TIMES,
))


def _holds_expr(value: t.Any) -> bool:
    if isinstance(value, Part):
        return True
    if isinstance(value, (list, tuple)):
        return any(map(_holds_expr, value))
    if isinstance(value, dict):
        return any(map(_holds_expr, value.values()))
    return False


def coerce(value: t.Any) -> Expr:
    """Wrap plain Python values as :class:`Literal`.

    Lists, tuples and dicts holding expressions anywhere inside become
    :class:`ListExpr` and :class:`MapExpr` so their items compile one by one.
    """
    if isinstance(value, Expr):
        return value
    if isinstance(value, Part):
        raise GrammarError(
            f"{type(value).__name__} cannot be used as an expression"
        )
    if _holds_expr(value):
        if isinstance(value, dict):
            return MapExpr(value)
        return ListExpr(value)
    return Literal(value)


def _operand(
    expr: Expr,
    param_reg: ParameterRegistry,
    version: t.Tuple[int, int],
    parent: int,
    *,
    wrap_equal: bool = False,
) -> str:
    if isinstance(expr, (Alias, Star)):
        raise GrammarError(
            f"{type(expr).__name__} is only allowed as a projection item"
        )
    text = expr._to_cypher(param_reg, version)
    precedence = expr._precedence
    if precedence < parent or (wrap_equal and precedence == parent):
        return f"({text})"
    return text


class Expr(Part, abc.ABC):
    @property
    def _precedence(self) -> int:
        return _Precedence.ATOM

    def __bool__(self) -> bool:
        raise TypeError(
            "Cypher expressions have no truth value; combine conditions "
            "with &, | and ~ instead of and, or and not"
        )

    def __hash__(self) -> int:
        return id(self)

    # comparison
    def __eq__(self, other: t.Any) -> BinaryExpr:  # type: ignore[override]
        return BinaryExpr(self, BinaryOp.EQ, coerce(other))

    def __ne__(self, other: t.Any) -> BinaryExpr:  # type: ignore[override]
        return BinaryExpr(self, BinaryOp.NE, coerce(other))

    def __lt__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.LT, coerce(other))

    def __le__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.LE, coerce(other))

    def __gt__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.GT, coerce(other))

    def __ge__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.GE, coerce(other))

    # boolean connectives
    def __and__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.AND, coerce(other))

    def __rand__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.AND, self)

    def __or__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.OR, coerce(other))

    def __ror__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.OR, self)

    def __xor__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.XOR, coerce(other))

    def __rxor__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.XOR, self)

    def __invert__(self) -> UnaryExpr:
        return UnaryExpr(UnaryOp.NOT, self)

    # arithmetic
    def __add__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.PLUS, coerce(other))

    def __radd__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.PLUS, self)

    def __sub__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.MINUS, coerce(other))

    def __rsub__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.MINUS, self)

    def __mul__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.TIMES, coerce(other))

    def __rmul__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.TIMES, self)

    def __truediv__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.DIVIDE, coerce(other))

    def __rtruediv__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.DIVIDE, self)

    def __mod__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.MODULO, coerce(other))

    def __rmod__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.MODULO, self)

    def __pow__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.POWER, coerce(other))

    def __rpow__(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(coerce(other), BinaryOp.POWER, self)

    def __neg__(self) -> UnaryExpr:
        return UnaryExpr(UnaryOp.NEG, self)

    def __pos__(self) -> te.Self:
        return self

    # predicates
    def starts_with(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.STARTS_WITH, coerce(other))

    def ends_with(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.ENDS_WITH, coerce(other))

    def contains(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.CONTAINS, coerce(other))

    def in_(self, other: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.IN, coerce(other))

    def matches(self, pattern: t.Any) -> BinaryExpr:
        return BinaryExpr(self, BinaryOp.REGEX, coerce(pattern))

    def is_null(self) -> UnaryExpr:
        return UnaryExpr(UnaryOp.IS_NULL, self)

    def is_not_null(self) -> UnaryExpr:
        return UnaryExpr(UnaryOp.IS_NOT_NULL, self)

    # projection helpers
    def attr(self, name: str) -> Property:
        return Property(self, name)

    def as_(self, alias: t.Union[Var, str]) -> Alias:
        return Alias(self, alias)

    def asc(self) -> SortItem:
        return SortItem(self, descending=False)

    def desc(self) -> SortItem:
        return SortItem(self, descending=True)

    # SET items
    def assign(self, value: t.Any) -> Assignment:
        return Assignment(self, value)

    def update(self, value: t.Any) -> Assignment:
        return Assignment(self, value, merge=True)


class Literal(Expr):
    _value: t.Any

    def __init__(self, value: t.Any) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"Literal({self._value!r})"

    @property
    def _precedence(self) -> int:
        if (isinstance(self._value, numbers.Real)
                and not isinstance(self._value, bool)
                and self._value < 0):
            return _Precedence.UNARY
        return _Precedence.ATOM

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        return format_literal(self._value)


class Var(Expr):
    _name: str

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return f"Var({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        return escape_identifier(self._name)


class Property(Expr):
    _target: Expr
    _name: str

    def __init__(self, target: Expr, name: str) -> None:
        self._target = target
        self._name = name

    def __repr__(self) -> str:
        return f"Property({self._target!r}, {self._name!r})"

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        target = _operand(self._target, param_reg, version, _Precedence.ATOM)
        return f"{target}.{escape_identifier(self._name)}"


class Param(Expr):
    """A query parameter rendered as ``$name``.

    Without a name the parameter is anonymous and the registry generates one
    from ``hint``. Without a value, the value must be supplied when the plan
    is built.
    """

    _name: t.Optional[str]
    _value: t.Any
    _hint: str

    def __init__(
        self,
        name: t.Optional[str] = None,
        value: t.Any = UNSET,
        *,
        hint: str = "p",
    ) -> None:
        if name is not None and not isinstance(name, str):
            raise GrammarError(
                f"Parameter name: expected str, got {type(name).__name__}"
            )
        if name == "":
            raise GrammarError("Parameter name must not be empty")
        self._name = name
        self._value = value
        self._hint = hint

    def __repr__(self) -> str:
        return f"Param({self._name!r}, {self._value!r})"

    @property
    def name(self) -> t.Optional[str]:
        return self._name

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        name = param_reg.get_or_register(self)
        return f"${escape_identifier(name)}"


class ListExpr(Expr):
    _items: t.Tuple[Expr, ...]

    def __init__(self, items: t.Iterable[t.Any]) -> None:
        self._items = tuple(map(coerce, items))

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        items = ", ".join(
            _operand(item, param_reg, version, _Precedence.OR)
            for item in self._items
        )
        return f"[{items}]"


class MapExpr(Expr):
    _entries: t.Dict[str, Expr]

    def __init__(self, entries: t.Mapping[str, t.Any]) -> None:
        for key in entries:
            if not isinstance(key, str):
                raise GrammarError(
                    f"Map keys must be str, got {type(key).__name__}"
                )
        self._entries = {k: coerce(v) for k, v in entries.items()}

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        entries = ", ".join(
            f"{escape_identifier(k)}: "
            f"{_operand(v, param_reg, version, _Precedence.OR)}"
            for k, v in self._entries.items()
        )
        return f"{{{entries}}}"


class UnaryExpr(Expr):
    _op: UnaryOp
    _target: Expr

    def __init__(
        self,
        op: UnaryOp,
        target: Expr
    ) -> None:
        self._op = op
        self._target = coerce(target)

    @property
    def _precedence(self) -> int:
        if self._op == UnaryOp.NOT:
            return _Precedence.NOT
        if self._op == UnaryOp.NEG:
            return _Precedence.UNARY
        return _Precedence.PREDICATE

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        op = self._op._to_cypher(version)
        if self._op == UnaryOp.NOT:
            target = _operand(self._target, param_reg, version, _Precedence.OR)
            return f"{op} ({target})"
        if self._op == UnaryOp.NEG:
            target = _operand(
                self._target, param_reg, version, _Precedence.UNARY
            )
            if target.startswith("-"):
                target = f"({target})"
            return f"{op}{target}"
        target = _operand(
            self._target, param_reg, version, _Precedence.PREDICATE,
            wrap_equal=True,
        )
        return f"{target} {op}"


class BinaryExpr(Expr):
    _op: BinaryOp
    _left: Expr
    _right: Expr

    def __init__(self, left: Expr, op: BinaryOp, right: Expr) -> None:
        self._op = op
        self._left = coerce(left)
        self._right = coerce(right)

    @property
    def _precedence(self) -> int:
        if self._op == BinaryOp.OR:
            # ORs render inside their own parentheses
            return _Precedence.ATOM
        return self._op._precedence

    def _or_operands(self) -> t.List[Expr]:
        operands: t.List[Expr] = []
        for side in (self._left, self._right):
            if isinstance(side, BinaryExpr) and side._op == BinaryOp.OR:
                operands.extend(side._or_operands())
            else:
                operands.append(side)
        return operands

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        op = self._op._to_cypher(version)
        if self._op == BinaryOp.OR:
            operands = (
                _operand(operand, param_reg, version, _Precedence.OR)
                for operand in self._or_operands()
            )
            return f"({f' {op} '.join(operands)})"

        precedence = self._op._precedence
        left = _operand(
            self._left, param_reg, version, precedence,
            wrap_equal=self._op not in _LEFT_ASSOCIATIVE,
        )
        right = _operand(
            self._right, param_reg, version, precedence,
            wrap_equal=not (
                self._op in _FULLY_ASSOCIATIVE
                and isinstance(self._right, BinaryExpr)
                and self._right._op == self._op
            ),
        )
        return f"{left} {op} {right}"


class Alias(Expr):
    _expr: Expr
    _alias: str

    def __init__(self, expr: t.Any, alias: t.Union[Var, str]) -> None:
        self._expr = coerce(expr)
        if isinstance(alias, Var):
            alias = alias.name
        if not isinstance(alias, str):
            raise GrammarError(
                f"Alias: expected str or Var, got {type(alias).__name__}"
            )
        self._alias = alias

    @property
    def alias(self) -> str:
        return self._alias

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        expr = _operand(self._expr, param_reg, version, _Precedence.OR)
        return f"{expr} AS {escape_identifier(self._alias)}"


class Star(Expr):
    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        return "*"


class Case(Expr):
    """``CASE WHEN c1 THEN e1 ... [ELSE e] END``."""

    _branches: t.List[t.Tuple[Expr, Expr]]
    _else: t.Optional[Expr]

    def __init__(
        self,
        *branches: t.Tuple[t.Any, t.Any],
        else_: t.Any = UNSET,
    ) -> None:
        self._branches = []
        for branch in branches:
            if not isinstance(branch, tuple) or len(branch) != 2:
                raise GrammarError(
                    "CASE branches must be (condition, value) pairs"
                )
            self.when(*branch)
        self._else = None if else_ is UNSET else coerce(else_)

    def when(self, condition: t.Any, value: t.Any) -> te.Self:
        self._branches.append((coerce(condition), coerce(value)))
        return self

    def else_(self, value: t.Any) -> te.Self:
        self._else = coerce(value)
        return self

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        if not self._branches:
            raise GrammarError("CASE requires at least one WHEN branch")
        parts = ["CASE"]
        for condition, value in self._branches:
            cond_str = _operand(condition, param_reg, version, _Precedence.OR)
            value_str = _operand(value, param_reg, version, _Precedence.OR)
            parts.append(f"WHEN {cond_str} THEN {value_str}")
        if self._else is not None:
            else_str = _operand(self._else, param_reg, version, _Precedence.OR)
            parts.append(f"ELSE {else_str}")
        parts.append("END")
        return " ".join(parts)


class Exists(Expr):
    """Existential sub-pattern ``EXISTS { MATCH pattern [WHERE cond] }``."""

    _pattern: t.Any
    _where: t.Optional[Expr]

    def __init__(self, pattern: t.Any, where: t.Any = None) -> None:
        self._pattern = pattern
        self._where = None if where is None else coerce(where)

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        from .pattern import compile_pattern

        pattern = compile_pattern(self._pattern, param_reg, version)
        if self._where is None:
            return f"EXISTS {{ MATCH {pattern} }}"
        where = _operand(self._where, param_reg, version, _Precedence.OR)
        return f"EXISTS {{ MATCH {pattern} WHERE {where} }}"


class SortItem(Part):
    _expr: Expr
    _descending: t.Optional[bool]

    def __init__(
        self,
        expr: t.Any,
        descending: t.Optional[bool] = None,
    ) -> None:
        self._expr = coerce(expr)
        self._descending = descending

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        expr = _operand(self._expr, param_reg, version, _Precedence.OR)
        if self._descending is None:
            return expr
        return f"{expr} {'DESC' if self._descending else 'ASC'}"


class Assignment(Part):
    """``target = value`` or, with ``merge=True``, ``target += value``."""

    _target: Expr
    _value: Expr
    _merge: bool

    def __init__(self, target: Expr, value: t.Any, merge: bool = False) -> None:
        if not isinstance(target, (Var, Property)):
            raise GrammarError(
                f"Assignment target must be a variable or a property, got "
                f"{type(target).__name__}"
            )
        if merge and not isinstance(target, Var):
            raise GrammarError("Map merge (+=) requires a variable target")
        self._target = target
        self._value = coerce(value)
        self._merge = merge

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        target = self._target._to_cypher(param_reg, version)
        value = _operand(self._value, param_reg, version, _Precedence.OR)
        op = "+=" if self._merge else "="
        return f"{target} {op} {value}"


class LabelSet(Part):
    """``n:Label1:Label2`` as used by SET and REMOVE."""

    _target: Var
    _labels: t.Tuple[str, ...]

    def __init__(self, target: t.Union[Var, str], *labels: str) -> None:
        if isinstance(target, str):
            target = Var(target)
        if not isinstance(target, Var):
            raise GrammarError(
                f"Labels can only be set on a variable, got "
                f"{type(target).__name__}"
            )
        if not labels:
            raise GrammarError("At least one label is required.")
        self._target = target
        self._labels = labels

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        labels = "".join(f":{escape_identifier(label)}"
                         for label in self._labels)
        return f"{self._target._to_cypher(param_reg, version)}{labels}"
