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


"""Errors raised while compiling a query plan into Cypher.

Compilation either returns a complete :class:`.CompiledQuery` or raises one
of the errors below; no partial query text is ever handed out.
"""


from __future__ import annotations


__all__ = [
    "CypherCompileError",
    "GrammarError",
    "ParameterError",
    "PatternError",
]


class CypherCompileError(ValueError):
    """Base class for all errors raised by the query compiler."""


class GrammarError(CypherCompileError):
    """An argument has the wrong shape for the clause or expression using it.

    Examples are a non-pattern argument to ``MATCH``, a non-assignment
    argument to ``SET``, an alias nested inside an expression or a feature
    that the configured Cypher version does not support.
    """


class ParameterError(GrammarError):
    """A query parameter cannot be bound unambiguously.

    Raised when a parameter has no value, when the same name is bound to two
    different values, or when an explicit name collides with a generated one.
    """


class PatternError(CypherCompileError):
    """A graph pattern is malformed.

    Examples are chains with an even number of elements, a relationship whose
    flanking direction operators disagree and empty relationship brackets.
    """
