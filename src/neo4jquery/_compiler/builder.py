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

from ..exceptions import GrammarError
from .access_mode import (
    check_access_mode,
    infer_access_mode,
)
from .assembler import assemble
from .base import CompiledQuery
from .clause import (
    Call,
    Clause,
    Create,
    CreateConstraint,
    CreateIndex,
    Delete,
    DetachDelete,
    DropConstraint,
    DropIndex,
    Foreach,
    Limit,
    LoadCsv,
    LoadCsvWithHeaders,
    Match,
    Merge,
    OnCreateSet,
    OnMatchSet,
    OptionalMatch,
    OrderBy,
    PatternArg,
    ProjectionArg,
    Remove,
    Return,
    Set,
    SetArg,
    Skip,
    Union,
    UnionAll,
    Unwind,
    Where,
    With,
)
from .config import CompilerConfig
from .expr import (
    LabelSet,
    Param,
    Property,
    Var,
)
from .log import log
from .param_registry import (
    NameCollector,
    ParameterRegistry,
)
from .plan import QueryPlan


if t.TYPE_CHECKING:
    import typing_extensions as te


__all__ = [
    "CypherBuilder",
    "Query",
]


class CypherBuilder:
    """Compiles query plans into :class:`CompiledQuery` objects.

    The builder only holds its (immutable) configuration. All compilation
    state lives in the :meth:`build` call, so one builder can be shared
    freely, including between threads.
    """

    _config: CompilerConfig

    def __init__(
        self,
        config: t.Optional[CompilerConfig] = None,
        *,
        cypher_version: t.Optional[t.Tuple[int, int]] = None,
    ) -> None:
        if config is None:
            if cypher_version is None:
                config = CompilerConfig()
            else:
                config = CompilerConfig(cypher_version=cypher_version)
        elif cypher_version is not None:
            config = config.model_copy(
                update={"cypher_version": tuple(cypher_version)}
            )
        self._config = config

    @property
    def config(self) -> CompilerConfig:
        return self._config

    def build(
        self,
        plan: t.Any,
        *,
        access_mode: t.Optional[str] = None,
        parameters: t.Optional[t.Mapping[str, t.Any]] = None,
    ) -> CompiledQuery:
        """Compile ``plan`` to Cypher text, parameters and access mode.

        :param plan: a :class:`QueryPlan`, a :class:`Query`, a single clause
            or an iterable of clauses.
        :param access_mode: ``"READ"`` or ``"WRITE"``, overriding inference.
        :param parameters: values for parameters declared without one.

        :raises GrammarError: if the plan cannot be expressed in Cypher.
        :raises PatternError: if a pattern is malformed.
        """
        plan = QueryPlan.of(plan)
        if not len(plan):
            raise GrammarError("Cannot build a query without clauses.")
        explicit_mode = check_access_mode(access_mode)
        if explicit_mode is None:
            explicit_mode = self._config.default_access_mode
        version = self._config.cypher_version
        # generated names must not depend on where explicit names first occur
        collector = NameCollector()
        assemble(plan, collector, version)
        param_reg = ParameterRegistry(parameters, reserved=collector.explicit)
        query = assemble(plan, param_reg, version, self._config.separator)
        mode = infer_access_mode(plan, explicit_mode)
        log.debug("Compiled query (%s):\n%s\nparameters: %s",
                  mode, query, param_reg.names)
        return CompiledQuery(query, param_reg.to_dict(), mode)


class Query:
    """Fluent front-end collecting clauses into a :class:`QueryPlan`.

    >>> p = Node("p", "Person")
    >>> q = (
    ...     Query()
    ...     .match(p)
    ...     .where(p.attr("age") > Param("min_age", 30))
    ...     .return_(p.attr("name"))
    ... )
    >>> q.build().query
    'MATCH (p:Person) WHERE p.age > $min_age RETURN p.name'
    """

    _clauses: t.List[Clause]

    def __init__(self, *clauses: Clause) -> None:
        self._clauses = []
        self.extend(*clauses)

    def __repr__(self) -> str:
        return f"Query({self.plan()!r})"

    def plan(self) -> QueryPlan:
        return QueryPlan(self._clauses)

    def build(
        self,
        builder: t.Optional[CypherBuilder] = None,
        *,
        access_mode: t.Optional[str] = None,
        parameters: t.Optional[t.Mapping[str, t.Any]] = None,
    ) -> CompiledQuery:
        if builder is None:
            builder = CypherBuilder()
        return builder.build(self.plan(), access_mode=access_mode,
                             parameters=parameters)

    def extend(self, *clauses: Clause) -> te.Self:
        for clause in clauses:
            if not isinstance(clause, Clause):
                raise GrammarError(
                    f"Expected a clause, got {type(clause).__name__}"
                )
        self._clauses.extend(clauses)
        return self

    def match(self, *patterns: PatternArg) -> te.Self:
        self._clauses.append(Match(*patterns))
        return self

    def optional_match(self, *patterns: PatternArg) -> te.Self:
        self._clauses.append(OptionalMatch(*patterns))
        return self

    def where(self, *conditions: t.Any) -> te.Self:
        self._clauses.append(Where(*conditions))
        return self

    def with_(self, *items: ProjectionArg, distinct: bool = False) -> te.Self:
        self._clauses.append(With(*items, distinct=distinct))
        return self

    def unwind(self, source: t.Any, alias: t.Union[Var, str]) -> te.Self:
        self._clauses.append(Unwind(source, alias))
        return self

    def create(self, *patterns: PatternArg) -> te.Self:
        self._clauses.append(Create(*patterns))
        return self

    def merge(
        self,
        pattern: PatternArg,
        on_create: t.Optional[t.Sequence[SetArg]] = None,
        on_match: t.Optional[t.Sequence[SetArg]] = None,
    ) -> te.Self:
        self._clauses.append(Merge(pattern, on_create, on_match))
        return self

    def set(self, *items: SetArg) -> te.Self:
        self._clauses.append(Set(*items))
        return self

    def on_create_set(self, *items: SetArg) -> te.Self:
        self._clauses.append(OnCreateSet(*items))
        return self

    def on_match_set(self, *items: SetArg) -> te.Self:
        self._clauses.append(OnMatchSet(*items))
        return self

    def delete(self, *targets: ProjectionArg) -> te.Self:
        self._clauses.append(Delete(*targets))
        return self

    def detach_delete(self, *targets: ProjectionArg) -> te.Self:
        self._clauses.append(DetachDelete(*targets))
        return self

    def remove(self, *items: t.Union[Property, LabelSet]) -> te.Self:
        self._clauses.append(Remove(*items))
        return self

    def order_by(self, *items: t.Any) -> te.Self:
        self._clauses.append(OrderBy(*items))
        return self

    def skip(self, count: t.Union[int, Param]) -> te.Self:
        self._clauses.append(Skip(count))
        return self

    def limit(self, count: t.Union[int, Param]) -> te.Self:
        self._clauses.append(Limit(count))
        return self

    def union(self) -> te.Self:
        self._clauses.append(Union())
        return self

    def union_all(self) -> te.Self:
        self._clauses.append(UnionAll())
        return self

    def call(
        self,
        body: t.Any,
        variables: t.Optional[t.Sequence[t.Union[Var, str]]] = None,
    ) -> te.Self:
        self._clauses.append(Call(body, variables))
        return self

    def load_csv(
        self,
        url: t.Union[str, Param],
        alias: t.Union[Var, str] = "row",
        *,
        with_headers: bool = False,
        field_terminator: t.Optional[str] = None,
    ) -> te.Self:
        cls = LoadCsvWithHeaders if with_headers else LoadCsv
        self._clauses.append(cls(url, alias, field_terminator))
        return self

    def foreach(
        self,
        variable: t.Union[Var, str],
        source: t.Any,
        body: t.Any,
    ) -> te.Self:
        self._clauses.append(Foreach(variable, source, body))
        return self

    def create_index(
        self,
        label: str,
        properties: t.Union[str, t.Sequence[str]],
        name: t.Optional[str] = None,
    ) -> te.Self:
        self._clauses.append(CreateIndex(label, properties, name))
        return self

    def drop_index(self, name: str) -> te.Self:
        self._clauses.append(DropIndex(name))
        return self

    def create_constraint(
        self,
        label: str,
        property_: str,
        type_: str = "unique",
        name: t.Optional[str] = None,
    ) -> te.Self:
        self._clauses.append(CreateConstraint(label, property_, type_, name))
        return self

    def drop_constraint(self, name: str) -> te.Self:
        self._clauses.append(DropConstraint(name))
        return self

    def return_(self, *items: ProjectionArg, distinct: bool = False) -> te.Self:
        self._clauses.append(Return(*items, distinct=distinct))
        return self
