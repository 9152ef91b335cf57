# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Canonical request construction for the AWS Signature Version 4 algorithm.

The canonical request is a standardized string laying out the components used in
the SigV4 signing algorithm::

    <HTTPMethod>\\n
    <CanonicalURI>\\n
    <CanonicalQueryString>\\n
    <CanonicalHeaders>\\n
    <SignedHeaders>\\n
    <HashedPayload>

Any change to the method, path, query, headers or body changes this string, and
therefore the signature. There is no local way to check it against what the
service computes; a mismatch only shows up as a rejected request.
"""

from hashlib import sha256
from typing import NamedTuple
from urllib.parse import parse_qsl, quote

from .interfaces.http import Fields

EMPTY_SHA256_HASH = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

HEADERS_EXCLUDED_FROM_SIGNING: tuple[str, ...] = ("authorization",)


class CanonicalRequest(NamedTuple):
    request: str
    """The newline-joined canonical request, without a trailing newline."""

    signed_headers: str
    """Lower-cased, sorted header names joined with ``;``."""


def hash_payload(body: bytes | None) -> str:
    """Lowercase hex SHA-256 of the body, or of zero bytes when there is none."""
    if not body:
        return EMPTY_SHA256_HASH
    return sha256(body).hexdigest()


def hash_canonical_request(canonical_request: str) -> str:
    return sha256(canonical_request.encode()).hexdigest()


class RequestCanonicalizer:
    """Builds the canonical form of a request.

    The ``Host`` header is expected to already be present in ``fields``. It is not
    checked here; a request without one still canonicalizes but will be rejected by
    the service.

    Header values are trimmed and runs of whitespace inside them collapse to one
    space, as the service does when it recomputes the signature. Values that
    differ only in that whitespace therefore sign identically.

    :param canonicalize_query: When true (the default) query parameters are
        percent-encoded and sorted. When false the query string is used verbatim.
    """

    def __init__(self, *, canonicalize_query: bool = True) -> None:
        self._canonicalize_query = canonicalize_query

    def canonicalize(
        self,
        *,
        method: str,
        path: str | None,
        query: str | None,
        fields: Fields,
        payload_hash: str,
    ) -> CanonicalRequest:
        normalized_fields = self.normalize_fields(fields)
        signed_headers = ";".join(normalized_fields)
        canonical_request = (
            f"{method.upper()}\n"
            f"{self.format_path(path)}\n"
            f"{self.format_query(query)}\n"
            f"{self.format_headers(normalized_fields)}\n"
            f"{signed_headers}\n"
            f"{payload_hash}"
        )
        return CanonicalRequest(canonical_request, signed_headers)

    def format_path(self, path: str | None) -> str:
        # Paths arrive percent-encoded and are not encoded a second time.
        if path is None:
            return "/"
        return path

    def format_query(self, query: str | None) -> str:
        if not query:
            return ""
        if not self._canonicalize_query:
            return query

        query_params = parse_qsl(qs=query, keep_blank_values=True)
        query_parts = (
            (quote(string=key, safe="-_.~"), quote(string=value, safe="-_.~"))
            for key, value in query_params
        )
        # key-value pairs must be in sorted order for their encoded forms.
        return "&".join(f"{key}={value}" for key, value in sorted(query_parts))

    def normalize_fields(self, fields: Fields) -> dict[str, str]:
        """Lower-case names, join repeated values and sort by name.

        Sorting happens here explicitly; the insertion order of ``fields`` never
        leaks into the result.
        """
        normalized: dict[str, list[str]] = {}
        for field in fields:
            name = field.name.lower()
            if name in HEADERS_EXCLUDED_FROM_SIGNING:
                continue
            normalized.setdefault(name, []).extend(
                _normalize_value(value) for value in field.values
            )
        return {name: ",".join(normalized[name]) for name in sorted(normalized)}

    def format_headers(self, normalized_fields: dict[str, str]) -> str:
        return "".join(f"{key}:{value}\n" for key, value in normalized_fields.items())


def _normalize_value(value: str) -> str:
    # Trim and collapse runs of whitespace into a single space.
    return " ".join(value.split())
