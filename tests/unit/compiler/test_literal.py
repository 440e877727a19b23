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
    escape_identifier,
    format_literal,
    GrammarError,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    (
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (0, "0"),
        (-42, "-42"),
        (3.5, "3.5"),
        (1e20, "1e20"),
        (1.5e-07, "1.5e-07"),
        ("hello", "'hello'"),
        ("", "''"),
        ("it's a \\test\\", "'it\\'s a \\\\test\\\\'"),
        ("line\nbreak", "'line\nbreak'"),
        ("grüße 🙂", "'grüße 🙂'"),
        ([1, "a", None], "[1, 'a', null]"),
        ((), "[]"),
        ([[1], [2, 3]], "[[1], [2, 3]]"),
        ({"a": 1, "b c": [True]}, "{a: 1, `b c`: [true]}"),
    )
)
def test_format_literal(value: t.Any, expected: str) -> None:
    assert format_literal(value) == expected


def test_booleans_are_not_rendered_as_numbers() -> None:
    assert format_literal([True, 1]) == "[true, 1]"


@pytest.mark.parametrize("value", (float("nan"), float("inf"), -float("inf")))
def test_non_finite_floats_are_rejected(value: float) -> None:
    with pytest.raises(GrammarError):
        format_literal(value)


@pytest.mark.parametrize("value", (object(), {1: "a"}, b"bytes", {1, 2}))
def test_unsupported_values_are_rejected(value: t.Any) -> None:
    with pytest.raises(GrammarError):
        format_literal(value)


@pytest.mark.parametrize(
    ("name", "expected"),
    (
        ("n", "n"),
        ("_private1", "_private1"),
        ("Person", "Person"),
        ("first name", "`first name`"),
        ("1st", "`1st`"),
        ("we`ird", "`we``ird`"),
        ("ünïcode", "`ünïcode`"),
    )
)
def test_escape_identifier(name: str, expected: str) -> None:
    assert escape_identifier(name) == expected


@pytest.mark.parametrize("name", ("", None, 1))
def test_escape_identifier_rejects_invalid_names(name: t.Any) -> None:
    with pytest.raises(GrammarError):
        escape_identifier(name)
