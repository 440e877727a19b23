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
import re
import typing as t
from dataclasses import (
    dataclass,
    field,
)

from ..api import READ_ACCESS
from ..exceptions import GrammarError


if t.TYPE_CHECKING:
    from .param_registry import ParameterRegistry


__all__ = [
    "CompiledQuery",
    "Part",
    "escape_identifier",
    "check_function_name",
]


_SIMPLE_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def escape_identifier(name: str) -> str:
    """Render a variable, label, type, property or alias name.

    Simple names are emitted as they are, everything else is wrapped in
    backticks with embedded backticks doubled.
    """
    if not isinstance(name, str):
        raise GrammarError(
            f"identifier: expected str, got {type(name).__name__}"
        )
    if not name:
        raise GrammarError("identifier must not be empty")
    if _SIMPLE_IDENTIFIER.fullmatch(name):
        return name
    escaped = name.replace("`", "``")
    return f"`{escaped}`"


def check_function_name(name: str) -> str:
    if not isinstance(name, str) or not all(
        _SIMPLE_IDENTIFIER.fullmatch(part) for part in name.split(".")
    ):
        raise GrammarError(f"Invalid function name: {name!r}")
    return name


@dataclass
class CompiledQuery:
    query: str
    parameters: t.Dict[str, t.Any] = field(default_factory=dict)
    access_mode: str = READ_ACCESS

    def __iter__(self) -> t.Iterator[t.Any]:
        # allows ``query, parameters, mode = compiled``
        return iter((self.query, self.parameters, self.access_mode))


class Part(abc.ABC):
    @abc.abstractmethod
    def _to_cypher(
        self,
        param_reg: ParameterRegistry,
        version: t.Tuple[int, int],
    ) -> str:
        ...
