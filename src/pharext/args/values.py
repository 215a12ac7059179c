from __future__ import annotations

from typing import Any
from typing import Mapping

from pharext.args.errors import BadOptionError
from pharext.args.spec import OptionSpec


def _repr(self):
    return f"<{self.__class__.__name__} at 0x{id(self):x}: {self}>"


def canonical(key: str) -> str:
    """canonical(key : string) -> string

    Return the dashed lookup form of an option key.  Keys already
    starting with a dash are returned unchanged, a bare single character
    becomes "-c" and any longer bare name becomes "--name".
    """
    if not key:
        raise ValueError("option key must not be empty")
    if key[0] != "-":
        if len(key) > 1:
            key = "-" + key
        key = "-" + key
    return key


def resolve_value(
    spec: OptionSpec | None,
    values: Mapping[str, Any],
    key: str,
    fallback: Any = None,
) -> Any:
    """
    Return the value stored under 'key' in 'values', else the default
    configured on 'spec', else 'fallback'.  A stored None counts as
    unset.  'key' must already be in canonical form.
    """
    value = values.get(key)
    if value is not None:
        return value
    if spec is not None and spec.has_default:
        return spec.default
    return fallback


class ArgValues:
    """
    Parsed option values, keyed by canonical option token.

    Every value is stored under both the short ("-x") and the long
    ("--name") form of its option so either can be used to read it.
    MULTI options accumulate a list of values in the order they were
    set; any other option keeps only the last value set.

    Instance attributes:
      table : { string : OptionSpec }
        the compiled lookup table of the owning CliArgs; shared, not
        copied, so recompiling the owner is seen here too
    """

    def __init__(self, table: Mapping[str, OptionSpec]) -> None:
        self.table = table
        self._values: dict[str, Any] = {}

    def __str__(self) -> str:
        return str(self._values)

    __repr__ = _repr

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArgValues):
            return self._values == other._values
        if isinstance(other, dict):
            return self._values == other
        return NotImplemented

    def __len__(self) -> int:
        return len(self._values)

    def spec_for(self, key: str) -> OptionSpec | None:
        return self.table.get(canonical(key))

    def _require_spec(self, key: str, action: str) -> OptionSpec:
        spec = self.spec_for(key)
        if spec is None:
            raise BadOptionError(key, action)
        return spec

    def has(self, key: str) -> bool:
        """Whether the option was set to something other than None;
        defaults do not count."""
        return self._values.get(canonical(key)) is not None

    def get(self, key: str, fallback: Any = None) -> Any:
        key = canonical(key)
        return resolve_value(self.table.get(key), self._values, key, fallback)

    def set(self, key: str, value: Any) -> None:
        spec = self._require_spec(key, "store")
        if spec.mode.is_multi:
            self._values.setdefault(spec.short_opt, []).append(value)
            self._values.setdefault(spec.long_opt, []).append(value)
        else:
            self._values[spec.short_opt] = value
            self._values[spec.long_opt] = value

    def remove(self, key: str) -> None:
        spec = self._require_spec(key, "remove")
        self._values.pop(spec.short_opt, None)
        self._values.pop(spec.long_opt, None)

    def as_dict(self) -> dict[str, Any]:
        """Return the explicitly set values keyed by long option name."""
        result = {}
        for key, value in self._values.items():
            if key.startswith("--") and value is not None:
                result[key[2:]] = list(value) if isinstance(value, list) else value
        return result
