# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Configuration helpers shared by the armteleop configuration dataclasses.

Every component config is a plain ``@dataclass`` with documented defaults. Mixing
in :class:`OverridableConfig` adds two constructors:

- ``config.with_overrides(**options)`` returns a copy with selected fields replaced
  and rejects option names the config does not define.
- ``Config.from_dict(data)`` builds a config from a YAML-parsed mapping, warning
  about (and ignoring) unknown keys.
"""

import dataclasses
import warnings
from typing import Any, Mapping, Optional, Type, TypeVar

T = TypeVar("T", bound="OverridableConfig")


def freeze_sequence(value: Any) -> Any:
    """Recursively convert lists (as produced by YAML) into tuples."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze_sequence(v) for v in value)
    return value


def as_vec3(value: Any) -> tuple:
    """Coerce a 3-element sequence into a float tuple."""
    values = tuple(float(v) for v in value)
    if len(values) != 3:
        raise ValueError(f"Expected 3 components, got {len(values)}: {value!r}")
    return values


class OverridableConfig:
    """Mixin for configuration dataclasses."""

    def with_overrides(self: T, **overrides: Any) -> T:
        """Return a copy of this config with the given fields replaced.

        Raises:
            TypeError: If an override names a field this config does not have.
        """
        known = {f.name for f in dataclasses.fields(self) if f.init}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(
                f"{type(self).__name__}: unknown option(s) {sorted(unknown)} "
                f"(valid: {sorted(known)})"
            )
        return dataclasses.replace(self, **overrides)

    @classmethod
    def from_dict(cls: Type[T], data: Optional[Mapping[str, Any]]) -> T:
        """Create the config from a dict (YAML parsing)."""
        data = dict(data or {})
        known = {f.name for f in dataclasses.fields(cls) if f.init}
        unknown = set(data) - known
        if unknown:
            warnings.warn(
                f"{cls.__name__}: unknown config keys ignored: {sorted(unknown)}",
                stacklevel=2,
            )
        kwargs = {
            key: cls._convert_field(key, value)
            for key, value in data.items()
            if key in known
        }
        return cls(**kwargs)

    @classmethod
    def _convert_field(cls, name: str, value: Any) -> Any:
        """Convert a raw YAML value for field ``name``; subclasses handle nested types."""
        return freeze_sequence(value)
