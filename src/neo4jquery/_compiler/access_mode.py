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

from ..api import (
    ACCESS_MODES,
    READ_ACCESS,
    WRITE_ACCESS,
)
from .clause import (
    _BodyClause,
    Clause,
    ClauseKind,
    MUTATION_KINDS,
)


__all__ = [
    "check_access_mode",
    "infer_access_mode",
    "is_mutating",
]


def check_access_mode(access_mode: t.Optional[str]) -> t.Optional[str]:
    if access_mode is None:
        return None
    if not isinstance(access_mode, str) \
            or access_mode.upper() not in ACCESS_MODES:
        raise ValueError(
            f"Access mode must be one of {ACCESS_MODES}, got {access_mode!r}"
        )
    return access_mode.upper()


def is_mutating(clauses: t.Iterable[Clause]) -> bool:
    for clause in clauses:
        if clause.kind in MUTATION_KINDS:
            return True
        if clause.kind == ClauseKind.FOREACH:
            # a FOREACH body only ever holds mutations
            return True
        if isinstance(clause, _BodyClause) and is_mutating(clause.body):
            return True
    return False


def infer_access_mode(
    clauses: t.Iterable[Clause],
    explicit: t.Optional[str] = None,
) -> str:
    """``WRITE`` if any clause (or nested body clause) mutates, else
    ``READ``. An explicit mode always wins."""
    if explicit is not None:
        return explicit
    return WRITE_ACCESS if is_mutating(clauses) else READ_ACCESS
