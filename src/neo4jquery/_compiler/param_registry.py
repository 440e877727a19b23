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
from collections import defaultdict

from ..exceptions import ParameterError


if t.TYPE_CHECKING:
    from .expr import Param


__all__ = [
    "NameCollector",
    "ParameterRegistry",
    "UNSET",
]


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: t.Any = _Unset()


def _same_value(a: t.Any, b: t.Any) -> bool:
    if a is b:
        return True
    try:
        return bool(a == b) and type(a) == type(b)
    except (TypeError, ValueError):
        # e.g. array-likes without a single truth value
        return False


class ParameterRegistry:
    """Ordered, de-duplicating collection of query parameters.

    Names keep the order in which they were first referenced. A named
    parameter occupies exactly one entry no matter how often it is
    referenced; anonymous parameters get a generated name derived from their
    hint and are de-duplicated by identity.

    :param bound: values for parameters that were declared without one.
    :param reserved: names that generated names must never take, usually
        the explicit parameter names of the whole plan.
    """

    _values: t.Dict[str, t.Any]
    _anonymous: t.Dict[int, t.Tuple[Param, str]]
    _generated: t.Set[str]
    _reserved: t.FrozenSet[str]
    _counters: t.Dict[str, int]
    _bound: t.Mapping[str, t.Any]

    def __init__(
        self,
        bound: t.Optional[t.Mapping[str, t.Any]] = None,
        *,
        reserved: t.Iterable[str] = (),
    ) -> None:
        self._values = {}
        self._anonymous = {}
        self._generated = set()
        self._reserved = frozenset(reserved)
        self._counters = defaultdict(int)
        self._bound = bound or {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    @property
    def names(self) -> t.List[str]:
        return list(self._values)

    def to_dict(self) -> t.Dict[str, t.Any]:
        return dict(self._values)

    def get(self, param: Param) -> t.Optional[str]:
        if param._name is not None:
            return param._name if param._name in self._values else None
        entry = self._anonymous.get(id(param))
        return None if entry is None else entry[1]

    def _generate_name(self, hint: str) -> str:
        while True:
            self._counters[hint] += 1
            if self._counters[hint] == 1:
                name = hint
            else:
                name = f"{hint}{self._counters[hint]}"
            if name not in self._values and name not in self._reserved:
                return name

    def _resolve_value(self, param: Param) -> t.Any:
        if param._value is not UNSET:
            return param._value
        if param._name is None:
            raise ParameterError(
                f"No value supplied for anonymous parameter "
                f"(hint {param._hint!r})"
            )
        if param._name in self._bound:
            return self._bound[param._name]
        raise ParameterError(f"No value supplied for parameter ${param._name}")

    def register(self, param: Param) -> str:
        if param._name is None:
            if id(param) in self._anonymous:
                raise ValueError(f"Parameter {param!r} is already registered.")
            value = self._resolve_value(param)
            name = self._generate_name(param._hint)
            self._generated.add(name)
            self._anonymous[id(param)] = (param, name)
            self._values[name] = value
            return name

        name = param._name
        value = self._resolve_value(param)
        if name in self._values:
            if name in self._generated:
                raise ParameterError(
                    f"Parameter name ${name} collides with a generated "
                    f"parameter name"
                )
            if not _same_value(self._values[name], value):
                raise ParameterError(
                    f"Parameter ${name} is bound to conflicting values "
                    f"{self._values[name]!r} and {value!r}"
                )
            return name
        self._values[name] = value
        return name

    def get_or_register(self, param: Param) -> str:
        name = self.get(param)
        if name is None or param._name is not None:
            # named parameters are re-checked for conflicting values
            name = self.register(param)
        return name


class NameCollector(ParameterRegistry):
    """Registry for a dry run that only records explicit parameter names.

    Values are neither resolved nor checked; the real compilation pass does
    that with the collected names passed as ``reserved``.
    """

    explicit: t.Set[str]

    def __init__(self) -> None:
        super().__init__()
        self.explicit = set()

    def register(self, param: Param) -> str:
        if param._name is None:
            name = self._generate_name(param._hint)
            self._anonymous[id(param)] = (param, name)
        else:
            name = param._name
            self.explicit.add(name)
        self._values.setdefault(name, None)
        return name
