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

import pytest

from neo4jquery import (
    Case,
    Exists,
    Expr,
    Func,
    GrammarError,
    ListExpr,
    Literal,
    MapExpr,
    Node,
    Param,
    ParameterRegistry,
    Var,
)
from neo4jquery.func import (
    collect,
    count,
    size,
)


a = Var("a")
b = Var("b")
c = Var("c")


def _render(
    expr: Expr,
    version: t.Tuple[int, int] = (5, 26),
) -> t.Tuple[str, t.Dict[str, t.Any]]:
    reg = ParameterRegistry()
    text = expr._to_cypher(reg, version)
    return text, reg.to_dict()


@pytest.mark.parametrize(
    ("expr", "expected"),
    (
        ((Var("age") > 25) | Var("admin"), "(age > 25 OR admin)"),
        ((a == 1) & (b == 2), "a = 1 AND b = 2"),
        (~(a == 1), "NOT (a = 1)"),
        (((a == 1) | (b == 2)) | (c == 3), "(a = 1 OR b = 2 OR c = 3)"),
        ((a == 1) | ((b == 2) | (c == 3)), "(a = 1 OR b = 2 OR c = 3)"),
        ((a | b) & c, "(a OR b) AND c"),
        ((a ^ b) & c, "(a XOR b) AND c"),
        (a ^ b, "a XOR b"),
        (a & True, "a AND true"),
        (True & a, "true AND a"),
        (a.is_null() & b, "a IS NULL AND b"),
        (a != None, "a <> null"),  # noqa: E711
        (a < 1, "a < 1"),
        (a <= 1, "a <= 1"),
        (a >= 1, "a >= 1"),
        (1 < a, "a > 1"),
    )
)
def test_boolean_and_comparison_rendering(expr: Expr, expected: str) -> None:
    assert _render(expr)[0] == expected


@pytest.mark.parametrize(
    ("expr", "expected"),
    (
        ((a + b) * c, "(a + b) * c"),
        (a + b * c, "a + b * c"),
        (a - (b - c), "a - (b - c)"),
        ((a - b) - c, "a - b - c"),
        (a + (b + c), "a + (b + c)"),
        (a * (b * c), "a * b * c"),
        (a * (b / c), "a * (b / c)"),
        (a / b * c, "a / b * c"),
        (a % 2, "a % 2"),
        (a ** 2, "a ^ 2"),
        (1 + a, "1 + a"),
        (10 - a, "10 - a"),
        (2 * a, "2 * a"),
        (-a, "-a"),
        (-Literal(-5), "-(-5)"),
        (Literal(-3) * a, "-3 * a"),
        (-(a + b), "-(a + b)"),
        ((a == b) == c, "(a = b) = c"),
        (~a == b, "(NOT (a)) = b"),
    )
)
def test_arithmetic_precedence(expr: Expr, expected: str) -> None:
    assert _render(expr)[0] == expected


@pytest.mark.parametrize(
    ("expr", "expected"),
    (
        (a.starts_with("Al"), "a STARTS WITH 'Al'"),
        (a.ends_with("ce"), "a ENDS WITH 'ce'"),
        (a.contains("lic"), "a CONTAINS 'lic'"),
        (a.in_([1, 2]), "a IN [1, 2]"),
        (a.matches("A.*"), "a =~ 'A.*'"),
        (a.is_null(), "a IS NULL"),
        (a.attr("x").is_not_null(), "a.x IS NOT NULL"),
        ((a + 1).is_null(), "a + 1 IS NULL"),
        ((a == 1).is_null(), "(a = 1) IS NULL"),
        (a.attr("name") == "O'Brien", "a.name = 'O\\'Brien'"),
        (a.attr("first name"), "a.`first name`"),
        (ListExpr([a, 1]), "[a, 1]"),
        (MapExpr({"x": a, "y": "z"}), "{x: a, y: 'z'}"),
    )
)
def test_predicates(expr: Expr, expected: str) -> None:
    assert _render(expr)[0] == expected


def test_parameters_are_registered() -> None:
    text, params = _render(
        (a.attr("age") > Param("min_age", 30))
        & (a.attr("age") < Param("max_age", 60))
        & (a.attr("score") > Param("min_age", 30))
    )

    assert text == "a.age > $min_age AND a.age < $max_age AND a.score > $min_age"
    assert params == {"min_age": 30, "max_age": 60}


def test_parameter_attribute() -> None:
    text, params = _render(Param("row", {"name": "x"}).attr("name"))

    assert text == "$row.name"
    assert params == {"row": {"name": "x"}}


def test_expressions_have_no_truth_value() -> None:
    with pytest.raises(TypeError):
        bool(a == 1)
    with pytest.raises(TypeError):
        (a == 1) and (b == 2)


def test_expressions_are_hashable() -> None:
    assert len({a, b, a}) == 2


def test_case() -> None:
    expr = Case((a > 1, "big"), else_="small")

    assert _render(expr)[0] == (
        "CASE WHEN a > 1 THEN 'big' ELSE 'small' END"
    )


def test_case_fluent() -> None:
    expr = Case().when(a > 10, "huge").when(a > 1, "big")

    assert _render(expr)[0] == (
        "CASE WHEN a > 10 THEN 'huge' WHEN a > 1 THEN 'big' END"
    )


def test_case_requires_a_branch() -> None:
    with pytest.raises(GrammarError):
        _render(Case())


def test_exists() -> None:
    pattern = Node("p") >> "KNOWS" >> Node("q")

    assert _render(Exists(pattern))[0] == "EXISTS { MATCH (p)-[:KNOWS]->(q) }"
    assert _render(Exists(pattern, where=Var("q").attr("age") > 3))[0] == (
        "EXISTS { MATCH (p)-[:KNOWS]->(q) WHERE q.age > 3 }"
    )


def test_double_negated_exists() -> None:
    expr = ~~Exists(Node("p"))

    assert _render(expr)[0] == "NOT (NOT (EXISTS { MATCH (p) }))"


def test_exists_rejects_non_patterns() -> None:
    with pytest.raises(GrammarError):
        _render(Exists(a))


@pytest.mark.parametrize(
    ("expr", "expected"),
    (
        (count(), "count(*)"),
        (count(a, distinct=True), "count(DISTINCT a)"),
        (collect(a.attr("name")), "collect(a.name)"),
        (size(a) > 2, "size(a) > 2"),
        (Func("apoc.coll.sum", a), "apoc.coll.sum(a)"),
        (Func("coalesce", a, 0), "coalesce(a, 0)"),
        (Func("rand"), "rand()"),
    )
)
def test_functions(expr: Expr, expected: str) -> None:
    assert _render(expr)[0] == expected


@pytest.mark.parametrize("name", ("bad name", "a..b", "", "1x"))
def test_invalid_function_names(name: str) -> None:
    with pytest.raises(GrammarError):
        Func(name)


def test_alias_inside_expression_fails() -> None:
    with pytest.raises(GrammarError):
        _render(a.as_("b") == 1)


def test_containers_holding_expressions_compile_item_by_item() -> None:
    expr = a.in_([Param("x", 1), [2, b], (3, 4)])
    text, params = _render(expr)

    assert text == "a IN [$x, [2, b], [3, 4]]"
    assert params == {"x": 1}
    assert isinstance(expr._right, ListExpr)


def test_map_holding_expressions_compiles_item_by_item() -> None:
    text, params = _render(a.update({"name": Param("name", "A"), "n": 1}))

    assert text == "a += {name: $name, n: 1}"
    assert params == {"name": "A"}


def test_plain_containers_stay_literals() -> None:
    expr = a.in_([1, [2, "x"], {"k": None}])

    assert isinstance(expr._right, Literal)
    assert _render(expr)[0] == "a IN [1, [2, 'x'], {k: null}]"


def test_map_with_non_string_keys_fails() -> None:
    with pytest.raises(GrammarError):
        a.in_({1: Param("x", 1)})
