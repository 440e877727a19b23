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
"""Graph patterns: nodes, relationships, chains and path selectors.

Patterns are usually written as chains::

    a = Node("a", "Person")
    b = Node("b", "Person")
    a >> Relationship("r", "KNOWS") >> b    # (a:Person)-[r:KNOWS]->(b:Person)
    a << "KNOWS" << b                       # (a:Person)<-[:KNOWS]-(b:Person)
    a - "KNOWS" - b                         # (a:Person)-[:KNOWS]-(b:Person)

In a relationship position a plain string is a relationship type, in a node
position it is a variable name. The chain operators decide the direction of
every relationship in the chain.
"""


from __future__ import annotations

import enum
import typing as t

from ..exceptions import (
    GrammarError,
    PatternError,
)
from .base import (
    escape_identifier,
    Part,
)
from .expr import (
    _operand,
    _Precedence,
    Expr,
    Param,
    Property,
    Var,
)


if t.TYPE_CHECKING:
    from .param_registry import ParameterRegistry


__all__ = [
    "Direction",
    "Length",
    "Node",
    "Relationship",
    "Chain",
    "Pattern",
    "PathSelector",
    "PathPattern",
    "compile_pattern",
]


_QUANTIFIER_MIN_VERSION = (5, 9)
_SELECTOR_MIN_VERSION = (5, 21)


class Direction(enum.Enum):
    OUTGOING = "OUTGOING"
    INCOMING = "INCOMING"
    BOTH = "BOTH"


_CHAIN_OPERATORS = {
    ">>": Direction.OUTGOING,
    "<<": Direction.INCOMING,
    "-": Direction.BOTH,
}


class Length:
    """Traversal length of a relationship: a fixed count or a range."""

    lower: int
    upper: t.Optional[int]
    is_exact: bool

    def __init__(
        self,
        lower: int,
        upper: t.Optional[int] = None,
        *,
        is_exact: bool = False,
    ) -> None:
        for bound in (lower, upper):
            if bound is None:
                continue
            if not isinstance(bound, int) or isinstance(bound, bool):
                raise PatternError(
                    f"Length bounds must be int, got {type(bound).__name__}"
                )
            if bound < 0:
                raise PatternError(
                    f"Length bounds must not be negative, got {bound}"
                )
        if upper is not None and upper < lower:
            raise PatternError(
                f"Upper length bound {upper} is smaller than lower bound "
                f"{lower}"
            )
        self.lower = lower
        self.upper = upper
        self.is_exact = is_exact

    @classmethod
    def exact(cls, n: int) -> Length:
        return cls(n, n, is_exact=True)

    @classmethod
    def range(cls, lower: int, upper: t.Optional[int] = None) -> Length:
        return cls(lower, upper)

    def __repr__(self) -> str:
        if self.is_exact:
            return f"Length.exact({self.lower})"
        return f"Length.range({self.lower}, {self.upper})"

    def _bracket_form(self) -> str:
        if self.is_exact:
            return f"*{self.lower}"
        if self.upper is None:
            if self.lower == 1:
                return "*"
            return f"*{self.lower}.."
        return f"*{self.lower}..{self.upper}"

    def _quantifier_form(self) -> str:
        if self.is_exact:
            return f"{{{self.lower}}}"
        if self.upper is None:
            if self.lower == 1:
                return "+"
            if self.lower == 0:
                return "*"
            return f"{{{self.lower},}}"
        return f"{{{self.lower},{self.upper}}}"


def _as_length(value: t.Union[Length, int, None]) -> t.Optional[Length]:
    if value is None or isinstance(value, Length):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Length.exact(value)
    raise PatternError(
        f"Expected Length or int, got {type(value).__name__}"
    )


def _param_hint(key: str) -> str:
    try:
        if escape_identifier(key) == key:
            return key
    except GrammarError:
        pass
    return "p"


def _capture_properties(
    properties: t.Optional[t.Mapping[str, t.Any]],
) -> t.Dict[str, Expr]:
    if properties is None:
        return {}
    captured: t.Dict[str, Expr] = {}
    for key, value in properties.items():
        if not isinstance(key, str):
            raise GrammarError(
                f"Property keys must be str, got {type(key).__name__}"
            )
        if isinstance(value, Expr):
            captured[key] = value
        else:
            captured[key] = Param(value=value, hint=_param_hint(key))
    return captured


def _encode_properties(
    properties: t.Dict[str, Expr],
    param_reg: ParameterRegistry,
    version: t.Tuple[int, int],
) -> str:
    if not properties:
        return ""
    entries = ", ".join(
        f"{escape_identifier(k)}: "
        f"{_operand(v, param_reg, version, _Precedence.OR)}"
        for k, v in properties.items()
    )
    return f"{{{entries}}}"


class _Entity(Part):
    _variable: t.Optional[str]
    _properties: t.Dict[str, Expr]

    @property
    def variable(self) -> t.Optional[str]:
        return self._variable

    def ref(self) -> Var:
        if self._variable is None:
            raise GrammarError(
                f"{type(self).__name__} without a variable cannot be "
                f"referenced"
            )
        return Var(self._variable)

    def attr(self, name: str) -> Property:
        return self.ref().attr(name)

    def _chain(self, op: str, other: t.Any) -> Chain:
        return Chain([self], [])._extend(op, other)

    def _rchain(self, op: str, other: t.Any) -> Chain:
        return Chain([other], [])._extend(op, self)

    def __rshift__(self, other: t.Any) -> Chain:
        return self._chain(">>", other)

    def __rrshift__(self, other: t.Any) -> Chain:
        return self._rchain(">>", other)

    def __lshift__(self, other: t.Any) -> Chain:
        return self._chain("<<", other)

    def __rlshift__(self, other: t.Any) -> Chain:
        return self._rchain("<<", other)

    def __sub__(self, other: t.Any) -> Chain:
        return self._chain("-", other)

    def __rsub__(self, other: t.Any) -> Chain:
        return self._rchain("-", other)


def _as_variable(variable: t.Union[Var, str, None]) -> t.Optional[str]:
    if variable is None:
        return None
    if isinstance(variable, Var):
        return variable.name
    if not isinstance(variable, str):
        raise GrammarError(
            f"Variable: expected str or Var, got {type(variable).__name__}"
        )
    return variable or None


class Node(_Entity):
    _labels: t.Tuple[str, ...]

    def __init__(
        self,
        variable: t.Union[Var, str, None] = None,
        labels: t.Union[str, t.Sequence[str], None] = None,
        properties: t.Optional[t.Mapping[str, t.Any]] = None,
    ) -> None:
        self._variable = _as_variable(variable)
        if labels is None:
            self._labels = ()
        elif isinstance(labels, str):
            self._labels = (labels,)
        else:
            self._labels = tuple(labels)
        self._properties = _capture_properties(properties)

    def __repr__(self) -> str:
        return f"Node({self._variable!r}, {self._labels!r})"

    @property
    def labels(self) -> t.Tuple[str, ...]:
        return self._labels

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        parts = ""
        if self._variable is not None:
            parts += escape_identifier(self._variable)
        parts += "".join(f":{escape_identifier(label)}"
                         for label in self._labels)
        properties = _encode_properties(self._properties, param_reg, version)
        if properties:
            parts = f"{parts} {properties}" if parts else properties
        return f"({parts})"


class Relationship(_Entity):
    _types: t.Tuple[str, ...]
    _direction: Direction
    _length: t.Optional[Length]
    _quantifier: t.Optional[Length]

    def __init__(
        self,
        variable: t.Union[Var, str, None] = None,
        types: t.Union[str, t.Sequence[str], None] = None,
        direction: Direction = Direction.OUTGOING,
        length: t.Union[Length, int, None] = None,
        quantifier: t.Union[Length, int, None] = None,
        properties: t.Optional[t.Mapping[str, t.Any]] = None,
    ) -> None:
        self._variable = _as_variable(variable)
        if types is None:
            self._types = ()
        elif isinstance(types, str):
            if not types:
                raise PatternError("Empty relationship type")
            self._types = (types,)
        else:
            self._types = tuple(types)
            if not self._types:
                raise PatternError("Empty relationship bracket")
            if any(not isinstance(type_, str) or not type_
                   for type_ in self._types):
                raise PatternError(
                    f"Relationship types must be non-empty str, got "
                    f"{self._types!r}"
                )
        self._direction = Direction(direction)
        self._length = _as_length(length)
        self._quantifier = _as_length(quantifier)
        if self._length is not None and self._quantifier is not None:
            raise PatternError(
                "A relationship takes either a length or a quantifier, "
                "not both"
            )
        self._properties = _capture_properties(properties)

    def __repr__(self) -> str:
        return (f"Relationship({self._variable!r}, {self._types!r}, "
                f"{self._direction})")

    @property
    def types(self) -> t.Tuple[str, ...]:
        return self._types

    @property
    def direction(self) -> Direction:
        return self._direction

    def _with_direction(self, direction: Direction) -> Relationship:
        if direction == self._direction:
            return self
        rel = object.__new__(Relationship)
        rel.__dict__.update(self.__dict__)
        rel._direction = direction
        return rel

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        detail = ""
        if self._variable is not None:
            detail += escape_identifier(self._variable)
        if self._types:
            detail += ":" + "|".join(map(escape_identifier, self._types))
        if self._length is not None:
            detail += self._length._bracket_form()
        properties = _encode_properties(self._properties, param_reg, version)
        if properties:
            detail = f"{detail} {properties}" if detail else properties

        if detail:
            body = f"-[{detail}]-"
        else:
            body = "--"
        if self._direction == Direction.OUTGOING:
            arrow = f"{body}>"
        elif self._direction == Direction.INCOMING:
            arrow = f"<{body}"
        else:
            arrow = body

        if self._quantifier is not None:
            if version < _QUANTIFIER_MIN_VERSION:
                raise GrammarError(
                    "Quantified relationships require Cypher "
                    f"{_QUANTIFIER_MIN_VERSION[0]}.{_QUANTIFIER_MIN_VERSION[1]}"
                    f" or later"
                )
            arrow += self._quantifier._quantifier_form()
        return arrow


class Pattern(Part):
    """Alternating sequence of nodes and relationships, starting and ending
    with a node."""

    _elements: t.Tuple[t.Union[Node, Relationship], ...]

    def __init__(self, *elements: t.Union[Node, Relationship]) -> None:
        if len(elements) % 2 == 0:
            raise PatternError(
                f"A pattern needs an odd number of elements, got "
                f"{len(elements)}"
            )
        for i, element in enumerate(elements):
            expected = Node if i % 2 == 0 else Relationship
            if not isinstance(element, expected):
                raise PatternError(
                    f"Expected {expected.__name__} at position {i}, got "
                    f"{type(element).__name__}"
                )
        self._elements = elements

    @property
    def elements(self) -> t.Tuple[t.Union[Node, Relationship], ...]:
        return self._elements

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        return "".join(element._to_cypher(param_reg, version)
                       for element in self._elements)


def _chain_node(element: t.Any, position: int) -> Node:
    if isinstance(element, Node):
        return element
    if isinstance(element, str) and element:
        return Node(element)
    raise PatternError(
        f"Expected a node at position {position}, got {element!r}"
    )


def _chain_relationship(
    element: t.Any,
    position: int,
    direction: Direction,
) -> Relationship:
    if isinstance(element, Relationship):
        return element._with_direction(direction)
    if isinstance(element, (str, list, tuple)):
        if not element:
            raise PatternError(
                f"Empty relationship bracket at position {position}"
            )
        return Relationship(types=element, direction=direction)
    raise PatternError(
        f"Expected a relationship at position {position}, got {element!r}"
    )


class Chain(Part):
    """Unvalidated chain built with ``>>``, ``<<`` and ``-``.

    Validation happens when the chain is turned into a :class:`Pattern`,
    since intermediate chains have an even number of elements.
    """

    _elements: t.List[t.Any]
    _operators: t.List[str]

    def __init__(self, elements: t.List[t.Any], operators: t.List[str]) -> None:
        self._elements = elements
        self._operators = operators

    def _extend(self, op: str, other: t.Any) -> Chain:
        if isinstance(other, Chain):
            return Chain(self._elements + other._elements,
                         self._operators + [op] + other._operators)
        return Chain(self._elements + [other], self._operators + [op])

    def __rshift__(self, other: t.Any) -> Chain:
        return self._extend(">>", other)

    def __lshift__(self, other: t.Any) -> Chain:
        return self._extend("<<", other)

    def __sub__(self, other: t.Any) -> Chain:
        return self._extend("-", other)

    def pattern(self) -> Pattern:
        elements = self._elements
        if len(elements) % 2 == 0:
            raise PatternError(
                f"A pattern needs an odd number of elements, got "
                f"{len(elements)}"
            )
        flat: t.List[t.Union[Node, Relationship]] = []
        for i, element in enumerate(elements):
            if i % 2 == 0:
                flat.append(_chain_node(element, i))
                continue
            before = _CHAIN_OPERATORS[self._operators[i - 1]]
            after = _CHAIN_OPERATORS[self._operators[i]]
            if before != after:
                raise PatternError(
                    f"Conflicting directions around relationship at "
                    f"position {i}: {self._operators[i - 1]!r} and "
                    f"{self._operators[i]!r}"
                )
            flat.append(_chain_relationship(element, i, before))
        return Pattern(*flat)

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        return self.pattern()._to_cypher(param_reg, version)


def _check_count(k: t.Any) -> int:
    if not isinstance(k, int) or isinstance(k, bool) or k < 1:
        raise PatternError(f"Path count must be a positive int, got {k!r}")
    return k


class PathSelector:
    _keyword: str

    def __init__(self, keyword: str) -> None:
        self._keyword = keyword

    def __repr__(self) -> str:
        return f"PathSelector({self._keyword!r})"

    @classmethod
    def shortest(cls, k: int = 1) -> PathSelector:
        return cls(f"SHORTEST {_check_count(k)}")

    @classmethod
    def all_shortest(cls) -> PathSelector:
        return cls("ALL SHORTEST")

    @classmethod
    def shortest_groups(cls, k: int = 1) -> PathSelector:
        return cls(f"SHORTEST {_check_count(k)} GROUPS")

    @classmethod
    def any(cls, k: t.Optional[int] = None) -> PathSelector:
        if k is None:
            return cls("ANY")
        return cls(f"ANY {_check_count(k)}")

    def _to_cypher(self, version: t.Tuple[int, int]) -> str:
        if version < _SELECTOR_MIN_VERSION:
            raise GrammarError(
                f"Path selectors require Cypher "
                f"{_SELECTOR_MIN_VERSION[0]}.{_SELECTOR_MIN_VERSION[1]} "
                f"or later"
            )
        return self._keyword


class PathPattern(Part):
    _pattern: t.Union[Pattern, Chain, Node]
    _selector: t.Optional[PathSelector]
    _variable: t.Optional[str]

    def __init__(
        self,
        pattern: t.Union[Pattern, Chain, Node],
        selector: t.Optional[PathSelector] = None,
        variable: t.Union[Var, str, None] = None,
    ) -> None:
        if not isinstance(pattern, (Pattern, Chain, Node)):
            raise GrammarError(
                f"PathPattern: expected a pattern, got "
                f"{type(pattern).__name__}"
            )
        self._pattern = pattern
        self._selector = selector
        self._variable = _as_variable(variable)

    def ref(self) -> Var:
        if self._variable is None:
            raise GrammarError("Path without a variable cannot be referenced")
        return Var(self._variable)

    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        text = self._pattern._to_cypher(param_reg, version)
        if self._selector is not None:
            text = f"{self._selector._to_cypher(version)} {text}"
        if self._variable is not None:
            text = f"{escape_identifier(self._variable)} = {text}"
        return text


def compile_pattern(
    pattern: t.Any,
    param_reg: ParameterRegistry,
    version: t.Tuple[int, int],
) -> str:
    if not isinstance(pattern, (Node, Pattern, Chain, PathPattern)):
        raise GrammarError(
            f"Expected a pattern, got {type(pattern).__name__}"
        )
    return pattern._to_cypher(param_reg, version)
