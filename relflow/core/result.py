"""Success/failure values returned by release operations.

Anything that can fail during a release returns `Ok(value)` or `Err(error)`;
exceptions are reserved for bugs. Callers narrow with `isinstance`:

    manifest = read_manifest(path)
    if isinstance(manifest, Err):
        return manifest
    print(manifest.value.spec)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E


Result: TypeAlias = Ok[T] | Err[E]
