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

import pydantic
import pytest

from neo4jquery import (
    comprehension,
    CompilerConfig,
    create_node,
    cypher,
    CypherBuilder,
    find_nodes,
    GrammarError,
    merge_node,
    ParameterError,
    READ_ACCESS,
    relate,
    Var,
    WRITE_ACCESS,
)
from neo4jquery.cmp import (
    contains,
    ends_with,
    eq,
    ge,
    gt,
    in_,
    le,
    lt,
    ne,
    starts_with,
)


class Person(pydantic.BaseModel):
    name: str
    age: int


@pytest.fixture
def builder() -> CypherBuilder:
    return CypherBuilder()


def test_comprehension(builder: CypherBuilder) -> None:
    plan = comprehension("p", "Person",
                         where=lambda p: p.attr("age") > 25,
                         ret=lambda p: p.attr("name"))

    compiled = builder.build(plan)

    assert compiled.query == "MATCH (p:Person) WHERE p.age > 25 RETURN p.name"
    assert compiled.parameters == {}
    assert compiled.access_mode == READ_ACCESS


def test_comprehension_with_expressions(builder: CypherBuilder) -> None:
    p = Var("p")
    plan = comprehension(p, "Person", where=p.attr("active"),
                         ret=[p.attr("name"), p.attr("age")])

    assert builder.build(plan).query == (
        "MATCH (p:Person) WHERE p.active RETURN p.name, p.age"
    )


def test_comprehension_returns_variable_by_default(
    builder: CypherBuilder
) -> None:
    assert builder.build(comprehension("p", "Person")).query == (
        "MATCH (p:Person) RETURN p"
    )


def test_cypher_template() -> None:
    compiled = cypher(
        "MATCH (n:Person {name: $name, age: \\$age}) WHERE n.x = $name "
        "RETURN n",
        {"name": "Alice", "age": 42, "unused": 1},
    )

    assert compiled.query == (
        "MATCH (n:Person {name: $name, age: $age}) WHERE n.x = $name RETURN n"
    )
    assert compiled.parameters == {"name": "Alice", "age": 42}
    assert list(compiled.parameters) == ["name", "age"]
    assert compiled.access_mode == WRITE_ACCESS


def test_cypher_template_keyword_values() -> None:
    compiled = cypher("RETURN $x", x=1, access_mode="read")

    assert compiled.parameters == {"x": 1}
    assert compiled.access_mode == READ_ACCESS


def test_cypher_template_missing_value() -> None:
    with pytest.raises(ParameterError):
        cypher("RETURN $x, $y", x=1)


def test_create_node(builder: CypherBuilder) -> None:
    compiled = builder.build(create_node("Person", {"name": "Alice", "age": 30}))

    assert compiled.query == (
        "CREATE (n:Person {name: $name, age: $age}) RETURN n"
    )
    assert compiled.parameters == {"name": "Alice", "age": 30}
    assert compiled.access_mode == WRITE_ACCESS


def test_create_node_from_model(builder: CypherBuilder) -> None:
    compiled = builder.build(create_node("Person", Person(name="Bob", age=5)))

    assert compiled.query == (
        "CREATE (n:Person {name: $name, age: $age}) RETURN n"
    )
    assert compiled.parameters == {"name": "Bob", "age": 5}


def test_create_node_without_properties(builder: CypherBuilder) -> None:
    assert builder.build(create_node("Person")).query == (
        "CREATE (n:Person) RETURN n"
    )


def test_merge_node(builder: CypherBuilder) -> None:
    compiled = builder.build(merge_node(
        "Person", {"name": "Alice"},
        on_create={"age": 30},
        on_match={"last_seen": "2025-02-15"},
    ))

    assert compiled.query == (
        "MERGE (n:Person {name: $name}) ON CREATE SET n.age = $age "
        "ON MATCH SET n.last_seen = $last_seen RETURN n"
    )
    assert compiled.parameters == {
        "name": "Alice", "age": 30, "last_seen": "2025-02-15"
    }


def test_merge_node_same_key_in_match_and_update(
    builder: CypherBuilder
) -> None:
    compiled = builder.build(merge_node(
        "Person", {"name": "Alice"}, on_match={"name": "Alicia"},
    ))

    assert compiled.query == (
        "MERGE (n:Person {name: $name}) ON MATCH SET n.name = $name2 RETURN n"
    )
    assert compiled.parameters == {"name": "Alice", "name2": "Alicia"}


def test_merge_node_requires_match_properties() -> None:
    with pytest.raises(GrammarError):
        merge_node("Person", {})


def test_relate(builder: CypherBuilder) -> None:
    compiled = builder.build(relate("4:a:1", "KNOWS", "4:a:2", {"since": 2024}))

    assert compiled.query == (
        "MATCH (a), (b) WHERE elementId(a) = $__start_id "
        "AND elementId(b) = $__end_id "
        "CREATE (a)-[r:KNOWS {since: $since}]->(b) RETURN r"
    )
    assert compiled.parameters == {
        "__start_id": "4:a:1", "__end_id": "4:a:2", "since": 2024
    }
    assert compiled.access_mode == WRITE_ACCESS


def test_find_nodes(builder: CypherBuilder) -> None:
    compiled = builder.build(find_nodes("Person", age=ge(18), name="Alice"))

    assert compiled.query == (
        "MATCH (n:Person) WHERE n.age >= $age AND n.name = $name RETURN n"
    )
    assert compiled.parameters == {"age": 18, "name": "Alice"}
    assert compiled.access_mode == READ_ACCESS


def test_find_nodes_without_filters(builder: CypherBuilder) -> None:
    assert builder.build(find_nodes("Person")).query == (
        "MATCH (n:Person) RETURN n"
    )


@pytest.mark.parametrize(
    ("cmp", "expected"),
    (
        (eq(1), "n.x = $x"),
        (ne(1), "n.x <> $x"),
        (lt(1), "n.x < $x"),
        (le(1), "n.x <= $x"),
        (gt(1), "n.x > $x"),
        (ge(1), "n.x >= $x"),
        (contains("a"), "n.x CONTAINS $x"),
        (starts_with("a"), "n.x STARTS WITH $x"),
        (ends_with("a"), "n.x ENDS WITH $x"),
        (in_([1, 2]), "n.x IN $x"),
    )
)
def test_comparators(
    builder: CypherBuilder, cmp: t.Any, expected: str
) -> None:
    compiled = builder.build(find_nodes("L", {"x": cmp}))

    assert compiled.query == f"MATCH (n:L) WHERE {expected} RETURN n"


def test_invalid_properties() -> None:
    with pytest.raises(GrammarError):
        create_node("Person", 42)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "kwargs",
    (
        {"separator": ""},
        {"separator": ", "},
        {"default_access_mode": "sometimes"},
        {"cypher_version": (5, -1)},
        {"unknown": 1},
    )
)
def test_invalid_config(kwargs: t.Dict[str, t.Any]) -> None:
    with pytest.raises(pydantic.ValidationError):
        CompilerConfig(**kwargs)


def test_config_is_frozen() -> None:
    config = CompilerConfig()

    assert config.cypher_version == (5, 26)
    assert config.separator == " "
    assert config.default_access_mode is None
    with pytest.raises(pydantic.ValidationError):
        config.separator = "\n"  # type: ignore[misc]


def test_config_normalizes_access_mode() -> None:
    assert CompilerConfig(default_access_mode="write").default_access_mode \
        == WRITE_ACCESS
