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

from .base import (
    CompiledQuery,
    escape_identifier,
    Part,
)
from .builder import (
    CypherBuilder,
    Query,
)
from .clause import (
    Call,
    Clause,
    ClauseKind,
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
    Remove,
    Return,
    Set,
    Skip,
    Union,
    UnionAll,
    Unwind,
    Where,
    With,
)
from .comprehension import comprehension
from .config import CompilerConfig
from .expr import (
    Alias,
    Assignment,
    BinaryExpr,
    BinaryOp,
    Case,
    Exists,
    Expr,
    LabelSet,
    ListExpr,
    Literal,
    MapExpr,
    Param,
    Property,
    SortItem,
    Star,
    UnaryExpr,
    UnaryOp,
    Var,
)
from .func import Func
from .literal import format_literal
from .param_registry import ParameterRegistry
from .pattern import (
    Chain,
    Direction,
    Length,
    Node,
    PathPattern,
    PathSelector,
    Pattern,
    Relationship,
)
from .plan import QueryPlan
from .shortcuts import (
    create_node,
    find_nodes,
    merge_node,
    relate,
)
from .template import cypher


__all__ = [
    "Alias",
    "Assignment",
    "BinaryExpr",
    "BinaryOp",
    "Call",
    "Case",
    "Chain",
    "Clause",
    "ClauseKind",
    "CompiledQuery",
    "CompilerConfig",
    "Create",
    "CreateConstraint",
    "CreateIndex",
    "CypherBuilder",
    "Delete",
    "DetachDelete",
    "Direction",
    "DropConstraint",
    "DropIndex",
    "Exists",
    "Expr",
    "Foreach",
    "Func",
    "LabelSet",
    "Length",
    "Limit",
    "ListExpr",
    "Literal",
    "LoadCsv",
    "LoadCsvWithHeaders",
    "MapExpr",
    "Match",
    "Merge",
    "Node",
    "OnCreateSet",
    "OnMatchSet",
    "OptionalMatch",
    "OrderBy",
    "Param",
    "ParameterRegistry",
    "Part",
    "PathPattern",
    "PathSelector",
    "Pattern",
    "Property",
    "Query",
    "QueryPlan",
    "Relationship",
    "Remove",
    "Return",
    "Set",
    "Skip",
    "SortItem",
    "Star",
    "UnaryExpr",
    "UnaryOp",
    "Union",
    "UnionAll",
    "Unwind",
    "Var",
    "Where",
    "With",
    "comprehension",
    "create_node",
    "cypher",
    "escape_identifier",
    "find_nodes",
    "format_literal",
    "merge_node",
    "relate",
]
