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
"""Compile structured graph queries to parameterised Cypher.

>>> from neo4jquery import Node, Param, Query
>>> p = Node("p", "Person")
>>> compiled = (
...     Query()
...     .match(p)
...     .where(p.attr("age") > Param("min_age", 30))
...     .return_(p.attr("name"))
...     .build()
... )
>>> compiled.query
'MATCH (p:Person) WHERE p.age > $min_age RETURN p.name'
>>> compiled.parameters
{'min_age': 30}
>>> compiled.access_mode
'READ'
"""


from . import (
    _compiler,
    cmp,
    func,
)
from ._compiler import *
from ._meta import version as __version__
from .api import (
    READ_ACCESS,
    WRITE_ACCESS,
)
from .exceptions import (
    CypherCompileError,
    GrammarError,
    ParameterError,
    PatternError,
)


__all__ = [
    *_compiler.__all__,
    "cmp",
    "func",
    "READ_ACCESS",
    "WRITE_ACCESS",
    "CypherCompileError",
    "GrammarError",
    "ParameterError",
    "PatternError",
    "__version__",
]
