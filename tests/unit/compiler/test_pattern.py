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
    Direction,
    GrammarError,
    Length,
    Node,
    ParameterRegistry,
    PathPattern,
    PathSelector,
    Pattern,
    PatternError,
    Relationship,
    Var,
)
from neo4jquery._compiler.pattern import compile_pattern


def _render(
    pattern: t.Any,
    version: t.Tuple[int, int] = (5, 26),
) -> t.Tuple[str, t.Dict[str, t.Any]]:
    reg = ParameterRegistry()
    text = compile_pattern(pattern, reg, version)
    return text, reg.to_dict()


@pytest.mark.parametrize(
    ("node", "expected"),
    (
        (Node(), "()"),
        (Node("n"), "(n)"),
        (Node("n", "Person"), "(n:Person)"),
        (Node("n", ("Person", "Admin")), "(n:Person:Admin)"),
        (Node(labels="Person"), "(:Person)"),
        (Node(Var("n"), "Odd Label"), "(n:`Odd Label`)"),
        (Node("n", "Person", {"name": Var("x")}), "(n:Person {name: x})"),
        (Node(properties={"name": Var("x")}), "({name: x})"),
    )
)
def test_node(node: Node, expected: str) -> None:
    assert _render(node)[0] == expected


def test_node_properties_become_parameters() -> None:
    node = Node("n", "Person", {"name": "Alice", "age": 30})

    text, params = _render(node)

    assert text == "(n:Person {name: $name, age: $age})"
    assert params == {"name": "Alice", "age": 30}


def test_node_properties_with_odd_keys() -> None:
    text, params = _render(Node("n", properties={"first name": "A"}))

    assert text == "(n {`first name`: $p})"
    assert params == {"p": "A"}


def test_same_node_rendered_twice_shares_parameters() -> None:
    node = Node("n", "Person", {"name": "Alice"})

    text, params = _render(Pattern(node, Relationship(), node))

    assert text == "(n:Person {name: $name})-->(n:Person {name: $name})"
    assert params == {"name": "Alice"}


@pytest.mark.parametrize(
    ("rel", "expected"),
    (
        (Relationship(), "-->"),
        (Relationship(direction=Direction.INCOMING), "<--"),
        (Relationship(direction=Direction.BOTH), "--"),
        (Relationship("r"), "-[r]->"),
        (Relationship("r", "KNOWS"), "-[r:KNOWS]->"),
        (Relationship(types=("A", "B")), "-[:A|B]->"),
        (Relationship("r", "KNOWS", Direction.INCOMING), "<-[r:KNOWS]-"),
        (Relationship("r", "KNOWS", length=Length.range(1, 3)),
         "-[r:KNOWS*1..3]->"),
        (Relationship(types="KNOWS", length=Length.exact(2)),
         "-[:KNOWS*2]->"),
        (Relationship(types="KNOWS", length=2), "-[:KNOWS*2]->"),
        (Relationship(length=Length.range(1)), "-[*]->"),
        (Relationship(length=Length.range(2)), "-[*2..]->"),
        (Relationship(types="KNOWS", quantifier=Length.range(1)),
         "-[:KNOWS]->+"),
        (Relationship(types="KNOWS", quantifier=Length.range(0)),
         "-[:KNOWS]->*"),
        (Relationship(types="KNOWS", quantifier=Length.exact(2)),
         "-[:KNOWS]->{2}"),
        (Relationship(types="KNOWS", quantifier=Length.range(1, 3)),
         "-[:KNOWS]->{1,3}"),
        (Relationship(types="KNOWS", quantifier=Length.range(2)),
         "-[:KNOWS]->{2,}"),
        (Relationship("r", properties={"since": Var("y")}),
         "-[r {since: y}]->"),
    )
)
def test_relationship(rel: Relationship, expected: str) -> None:
    assert _render(Pattern(Node(), rel, Node()))[0] == f"(){expected}()"


@pytest.mark.parametrize(
    "kwargs",
    (
        {"lower": -1},
        {"lower": 3, "upper": 2},
        {"lower": 1.5},
        {"lower": True},
    )
)
def test_invalid_length_bounds(kwargs: t.Dict[str, t.Any]) -> None:
    with pytest.raises(PatternError):
        Length(**kwargs)


def test_length_and_quantifier_are_exclusive() -> None:
    with pytest.raises(PatternError):
        Relationship(length=1, quantifier=2)


def test_quantifier_requires_recent_version() -> None:
    rel = Relationship(types="KNOWS", quantifier=Length.range(1))
    pattern = Pattern(Node(), rel, Node())

    with pytest.raises(GrammarError):
        _render(pattern, version=(5, 8))
    assert _render(pattern, version=(5, 9))[0] == "()-[:KNOWS]->+()"


def test_chain_outgoing() -> None:
    a = Node("a", "Person")
    b = Node("b", "Person")
    c = Node("c", "Company")

    pattern = a >> "KNOWS" >> b >> "WORKS_AT" >> c

    assert _render(pattern)[0] == (
        "(a:Person)-[:KNOWS]->(b:Person)-[:WORKS_AT]->(c:Company)"
    )


def test_chain_incoming_and_undirected() -> None:
    a = Node("a")
    b = Node("b")

    assert _render(a << "KNOWS" << b)[0] == "(a)<-[:KNOWS]-(b)"
    assert _render(a - "KNOWS" - b)[0] == "(a)-[:KNOWS]-(b)"


def test_chain_operators_decide_direction() -> None:
    rel = Relationship("r", "KNOWS", Direction.OUTGOING)

    assert _render(Node("a") << rel << Node("b"))[0] == "(a)<-[r:KNOWS]-(b)"
    assert rel.direction == Direction.OUTGOING


def test_chain_strings_in_node_positions_are_variables() -> None:
    assert _render(Node("a") >> "KNOWS" >> "b")[0] == "(a)-[:KNOWS]->(b)"
    assert _render("a" >> Relationship() >> Node("b"))[0] == "(a)-->(b)"


def test_chain_with_type_alternatives() -> None:
    pattern = Node("a") >> ["KNOWS", "LIKES"] >> Node("b")

    assert _render(pattern)[0] == "(a)-[:KNOWS|LIKES]->(b)"


def test_chain_concatenation() -> None:
    pattern = Node("a") >> (Relationship("r") >> Node("b"))

    assert _render(pattern)[0] == "(a)-[r]->(b)"


@pytest.mark.parametrize(
    "build",
    (
        lambda a, b: a >> "KNOWS" << b,
        lambda a, b: a << "KNOWS" >> b,
        lambda a, b: (a - "KNOWS") >> b,
    )
)
def test_chain_conflicting_directions(build: t.Callable) -> None:
    with pytest.raises(PatternError):
        _render(build(Node("a"), Node("b")))


@pytest.mark.parametrize("empty", ([], "", ()))
def test_chain_empty_relationship_bracket(empty: t.Any) -> None:
    with pytest.raises(PatternError):
        _render(Node("a") >> empty >> Node("b"))


def test_chain_even_element_count() -> None:
    with pytest.raises(PatternError):
        _render(Node("a") >> "KNOWS")


def test_chain_wrong_element_kinds() -> None:
    with pytest.raises(PatternError):
        _render(Node("a") >> Node("b") >> Node("c"))
    with pytest.raises(PatternError):
        _render(Node("a") >> Relationship() >> Relationship())


@pytest.mark.parametrize("count", (0, 2, 4))
def test_pattern_even_element_count(count: int) -> None:
    elements = [Node() if i % 2 == 0 else Relationship()
                for i in range(count)]
    with pytest.raises(PatternError):
        Pattern(*elements)


def test_pattern_element_kinds() -> None:
    with pytest.raises(PatternError):
        Pattern(Node(), Node(), Node())


def test_empty_relationship_types() -> None:
    with pytest.raises(PatternError):
        Relationship(types=())
    with pytest.raises(PatternError):
        Relationship(types="")


@pytest.mark.parametrize(
    ("selector", "expected"),
    (
        (PathSelector.shortest(), "SHORTEST 1"),
        (PathSelector.shortest(3), "SHORTEST 3"),
        (PathSelector.all_shortest(), "ALL SHORTEST"),
        (PathSelector.shortest_groups(2), "SHORTEST 2 GROUPS"),
        (PathSelector.any(), "ANY"),
        (PathSelector.any(2), "ANY 2"),
    )
)
def test_path_selector(selector: PathSelector, expected: str) -> None:
    pattern = PathPattern(
        Node("a") >> Relationship(quantifier=Length.range(1)) >> Node("b"),
        selector,
        "p",
    )

    assert _render(pattern)[0] == f"p = {expected} (a)-->+(b)"


def test_path_selector_requires_recent_version() -> None:
    pattern = PathPattern(Node("a"), PathSelector.any())

    with pytest.raises(GrammarError):
        _render(pattern, version=(5, 20))
    assert _render(pattern, version=(5, 21))[0] == "ANY (a)"


def test_path_variable_without_selector() -> None:
    pattern = PathPattern(Node("a") >> Relationship() >> Node("b"),
                          variable="p")

    assert _render(pattern)[0] == "p = (a)-->(b)"
    assert pattern.ref().name == "p"


@pytest.mark.parametrize("k", (0, -1, 1.5))
def test_path_selector_count_must_be_positive(k: t.Any) -> None:
    with pytest.raises(PatternError):
        PathSelector.shortest(k)


def test_non_pattern_is_rejected() -> None:
    with pytest.raises(GrammarError):
        _render(Var("a"))
