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

from pydantic import (
    BaseModel,
    ConfigDict,
    field_validator,
)

from ..api import (
    READ_ACCESS,
    WRITE_ACCESS,
)


__all__ = [
    "CompilerConfig",
    "DEFAULT_CYPHER_VERSION",
]


DEFAULT_CYPHER_VERSION = (5, 26)


class CompilerConfig(BaseModel):
    """Immutable compiler settings.

    ``cypher_version`` gates syntax that older servers reject (quantified
    relationships, path selectors, scoped ``CALL``). ``separator`` joins the
    clause fragments. ``default_access_mode`` overrides access-mode inference
    for every query built with this configuration.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    cypher_version: t.Tuple[int, int] = DEFAULT_CYPHER_VERSION
    separator: str = " "
    default_access_mode: t.Optional[
        t.Literal["READ", "WRITE"]  # READ_ACCESS, WRITE_ACCESS
    ] = None

    @field_validator("cypher_version")
    @classmethod
    def _check_version(cls, value: t.Tuple[int, int]) -> t.Tuple[int, int]:
        if any(part < 0 for part in value):
            raise ValueError(f"Invalid Cypher version {value!r}")
        return value

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, value: str) -> str:
        if not value or not value.isspace():
            raise ValueError(
                f"Clause separator must be non-empty whitespace, got {value!r}"
            )
        return value

    @field_validator("default_access_mode", mode="before")
    @classmethod
    def _normalize_access_mode(cls, value: t.Any) -> t.Any:
        if isinstance(value, str) and value.upper() in (READ_ACCESS,
                                                        WRITE_ACCESS):
            return value.upper()
        return value
