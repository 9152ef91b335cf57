# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Iterator
from copy import deepcopy
from dataclasses import dataclass, replace
from urllib.parse import urlparse, urlunparse

import polly_signers.interfaces.http as interfaces_http

DEFAULT_PORTS: dict[str, int] = {"http": 80, "https": 443}


class Field(interfaces_http.Field):
    """One request header: the name as it will be sent and each value given for it."""

    def __init__(self, *, name: str, values: Iterable[str] | None = None):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def as_string(self, delimiter: str = ",") -> str:
        """Values joined verbatim by ``delimiter``; empty when there are none."""
        return delimiter.join(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, values={self.values!r})"


class Fields(interfaces_http.Fields):
    """Request headers keyed by lower-cased name, kept in insertion order.

    Headers whose names differ only in case are one entry. Adding a name that is
    already present appends to its values instead of replacing them.
    """

    def __init__(self, initial: Iterable[interfaces_http.Field] | None = None):
        self._entries: dict[str, interfaces_http.Field] = {}
        if initial is not None:
            self.extend(initial)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Fields:
        """Build from ``(name, value)`` pairs, merging repeated names in order."""
        return cls(Field(name=name, values=[value]) for name, value in pairs)

    def set_field(self, field: interfaces_http.Field) -> None:
        """Replace every value stored under ``field.name``."""
        self._entries[field.name.lower()] = field

    def extend(self, other: Iterable[interfaces_http.Field]) -> None:
        """Add each of ``other``'s fields, appending values to names already present."""
        for field in other:
            key = field.name.lower()
            if key in self._entries:
                self._entries[key].values.extend(field.values)
            else:
                self._entries[key] = Field(name=field.name, values=field.values)

    def get(
        self, name: str, default: interfaces_http.Field | None = None
    ) -> interfaces_http.Field | None:
        return self._entries.get(name.lower(), default)

    def __getitem__(self, name: str) -> interfaces_http.Field:
        return self._entries[name.lower()]

    def __delitem__(self, name: str) -> None:
        del self._entries[name.lower()]

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._entries

    def __iter__(self) -> Iterator[interfaces_http.Field]:
        return iter(list(self._entries.values()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return False
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"Fields({list(self)!r})"


@dataclass(kw_only=True, frozen=True)
class URI(interfaces_http.URI):
    """Universal Resource Identifier, target location for a :py:class:`AWSRequest`."""

    scheme: str = "https"
    """For example ``http`` or ``https``."""

    host: str
    """The hostname, for example ``polly.us-east-1.amazonaws.com``."""

    port: int | None = None
    """An explicit port number."""

    path: str | None = None
    """Path component of the URI, already percent-encoded."""

    query: str | None = None
    """Query component of the URI as string."""

    @classmethod
    def from_url(cls, url: str) -> URI:
        parts = urlparse(url)
        if not parts.hostname:
            raise ValueError(f"URL has no host: {url!r}")
        return cls(
            scheme=parts.scheme or "https",
            host=parts.hostname,
            port=parts.port,
            path=parts.path or None,
            query=parts.query or None,
        )

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``.

        ``port`` is only included if set.
        """
        if self.port is not None:
            return f"{self.host}:{self.port}"
        return self.host

    @property
    def authority(self) -> str:
        """The value of the ``Host`` header for this URI.

        Same as ``netloc`` but omits the port when it is the default for the scheme.
        """
        if self.port is not None and DEFAULT_PORTS.get(self.scheme) == self.port:
            return replace(self, port=None).netloc
        return self.netloc

    def build(self) -> str:
        """Construct URI string representation.

        Returns a string of the form ``{scheme}://{host}:{port}{path}?{query}``
        """
        components = (
            self.scheme,
            self.netloc,
            self.path or "",
            "",  # params
            self.query,
            "",  # fragment
        )
        return urlunparse(components)


class AWSRequest(interfaces_http.Request):
    def __init__(
        self,
        *,
        destination: URI,
        method: str,
        body: bytes | None = None,
        fields: Fields | None = None,
    ):
        self.destination = destination
        self.method = method
        self.body = body
        self.fields = fields if fields is not None else Fields()

    def __deepcopy__(self, memo: dict[int, AWSRequest] | None = None) -> AWSRequest:
        if memo is None:
            memo = {}

        if id(self) in memo:
            return memo[id(self)]

        # the destination and body are immutable and can be shared
        new_instance = self.__class__(
            destination=self.destination,
            body=self.body,
            method=self.method,
            fields=deepcopy(self.fields, memo),
        )
        memo[id(self)] = new_instance
        return new_instance

    def __repr__(self) -> str:
        return (
            f"AWSRequest(method={self.method!r}, "
            f"destination={self.destination.build()!r}, fields={self.fields!r})"
        )
