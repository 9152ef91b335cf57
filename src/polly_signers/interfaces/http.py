# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable


class Field(Protocol):
    """A single header. Names compare case-insensitively."""

    name: str
    values: list[str]

    def as_string(self, delimiter: str = ",") -> str: ...


class Fields(Protocol):
    """The headers of one request, looked up by case-insensitive name."""

    def set_field(self, field: Field) -> None: ...

    def extend(self, other: Iterable[Field]) -> None: ...

    def get(self, name: str, default: Field | None = None) -> Field | None: ...

    def __delitem__(self, name: str) -> None: ...

    def __contains__(self, name: str) -> bool: ...

    def __iter__(self) -> Iterator[Field]: ...


@runtime_checkable
class URI(Protocol):
    """Where a :py:class:`Request` is sent."""

    scheme: str
    host: str
    port: int | None

    path: str | None
    """Already percent-encoded; signed exactly as given."""

    query: str | None
    """Raw query string without the leading ``?``."""

    def build(self) -> str: ...

    @property
    def netloc(self) -> str: ...


class Request(Protocol):
    """An outgoing HTTP request, before or after signing."""

    destination: URI
    method: str
    body: bytes | None
    fields: Fields
