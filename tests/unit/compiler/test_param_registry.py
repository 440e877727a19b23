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

import pytest

from neo4jquery import (
    Param,
    ParameterError,
    ParameterRegistry,
)
from neo4jquery._compiler.param_registry import (
    NameCollector,
)


def test_named_parameter_is_registered_once() -> None:
    reg = ParameterRegistry()
    p = Param("age", 30)

    assert reg.get_or_register(p) == "age"
    assert reg.get_or_register(p) == "age"
    assert reg.get_or_register(Param("age", 30)) == "age"
    assert reg.to_dict() == {"age": 30}
    assert len(reg) == 1


def test_anonymous_parameters_get_generated_names() -> None:
    reg = ParameterRegistry()
    first = Param(value=1, hint="age")
    second = Param(value=2, hint="age")
    third = Param(value=3)

    assert reg.get_or_register(first) == "age"
    assert reg.get_or_register(second) == "age2"
    assert reg.get_or_register(first) == "age"
    assert reg.get_or_register(third) == "p"
    assert reg.names == ["age", "age2", "p"]
    assert reg.to_dict() == {"age": 1, "age2": 2, "p": 3}


def test_generated_names_skip_explicit_names() -> None:
    reg = ParameterRegistry()
    reg.get_or_register(Param("age", 1))

    assert reg.get_or_register(Param(value=2, hint="age")) == "age2"


def test_explicit_name_colliding_with_generated_name_fails() -> None:
    reg = ParameterRegistry()
    reg.get_or_register(Param(value=1, hint="age"))

    with pytest.raises(ParameterError):
        reg.get_or_register(Param("age", 1))


def test_conflicting_values_fail() -> None:
    reg = ParameterRegistry()
    reg.get_or_register(Param("age", 1))

    with pytest.raises(ParameterError):
        reg.get_or_register(Param("age", 2))


def test_equal_values_of_different_types_conflict() -> None:
    reg = ParameterRegistry()
    reg.get_or_register(Param("flag", 1))

    with pytest.raises(ParameterError):
        reg.get_or_register(Param("flag", True))


def test_value_less_parameter_is_bound_from_mapping() -> None:
    reg = ParameterRegistry({"min_age": 18})

    assert reg.get_or_register(Param("min_age")) == "min_age"
    assert reg.to_dict() == {"min_age": 18}


def test_value_less_parameter_without_binding_fails() -> None:
    reg = ParameterRegistry()

    with pytest.raises(ParameterError):
        reg.get_or_register(Param("min_age"))


def test_registration_order_is_preserved() -> None:
    reg = ParameterRegistry()
    for name in ("c", "a", "b"):
        reg.get_or_register(Param(name, name))

    assert list(reg.to_dict()) == ["c", "a", "b"]
    assert "a" in reg
    assert "d" not in reg


def test_generated_names_skip_reserved_names() -> None:
    reg = ParameterRegistry(reserved={"age"})

    assert reg.get_or_register(Param(value=1, hint="age")) == "age2"
    assert reg.get_or_register(Param("age", 2)) == "age"
    assert reg.to_dict() == {"age2": 1, "age": 2}


def test_name_collector_records_explicit_names_only() -> None:
    collector = NameCollector()
    collector.get_or_register(Param(value=1, hint="name"))
    collector.get_or_register(Param("name"))
    collector.get_or_register(Param("limit", 5))

    assert collector.explicit == {"name", "limit"}


def test_anonymous_parameter_without_value_names_its_hint() -> None:
    reg = ParameterRegistry()

    with pytest.raises(ParameterError, match="anonymous parameter.*'size'"):
        reg.get_or_register(Param(hint="size"))
