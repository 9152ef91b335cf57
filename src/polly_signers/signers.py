# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
# ruff: noqa: S101
import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Final, Required, TypedDict

from ._http import AWSRequest, Field
from .canonical import (
    CanonicalRequest,
    RequestCanonicalizer,
    hash_canonical_request,
    hash_payload,
)
from .clock import Clock, SystemClock, date_stamp, format_amz_date
from .exceptions import ExpiredCredentialsError, MissingCredentialsError
from .interfaces.identity import AWSCredentialsIdentity
from .keys import SIGNING_KEY_TERMINATOR, derive_signing_key, hmac_sha256

logger: Final = logging.getLogger(__name__)

SIGNING_ALGORITHM: str = "AWS4-HMAC-SHA256"
AMZ_DATE_HEADER: str = "X-Amz-Date"
SECURITY_TOKEN_HEADER: str = "X-Amz-Security-Token"


class SigV4SigningProperties(TypedDict, total=False):
    region: Required[str]
    service: Required[str]
    date: str
    canonicalize_query: bool


@dataclass(frozen=True, kw_only=True)
class SignatureResult:
    """The values produced by one signing attempt.

    A result belongs to exactly one request. It can't be reused for another, even
    to the same endpoint, since the signature covers that request's headers, path,
    query and body.
    """

    authorization: str
    """Value of the ``Authorization`` header."""

    amz_date: str
    """Value of the ``X-Amz-Date`` header, ``YYYYMMDDTHHMMSSZ``."""

    credential_scope: str
    signed_headers: str
    signature: str


class SigV4Signer:
    """Request signer for applying the AWS Signature Version 4 algorithm.

    The signer holds no state between calls besides its clock, so one instance can
    be shared freely across threads.

    :param clock: Source of the signing timestamp. Defaults to the system clock.
    """

    def __init__(self, *, clock: Clock | None = None) -> None:
        self._clock = clock if clock is not None else SystemClock()

    def sign(
        self,
        *,
        properties: SigV4SigningProperties,
        request: AWSRequest,
        identity: AWSCredentialsIdentity,
    ) -> AWSRequest:
        """Generate and apply a SigV4 Signature to a copy of the supplied request.

        The supplied request is left untouched, so a failed attempt never leaves a
        partially signed request behind. Any change made to a signed header after
        this returns invalidates the signature.

        :param properties: SigV4SigningProperties to define signing primitives
            such as the target service, region, and date.
        :param request: An AWSRequest to sign prior to sending to the service.
        :param identity: A set of credentials representing an AWS Identity or role
            capacity.
        """
        self._validate_identity(identity=identity)
        new_properties = self._normalize_signing_properties(properties=properties)
        assert "date" in new_properties

        new_request = deepcopy(request)
        # Host and X-Amz-Date must be in place before the canonical request is built.
        new_request.fields.set_field(
            Field(name="Host", values=[new_request.destination.authority])
        )
        new_request.fields.set_field(
            Field(name=AMZ_DATE_HEADER, values=[new_properties["date"]])
        )
        # A token left over from an earlier signature must not be signed again.
        if SECURITY_TOKEN_HEADER in new_request.fields:
            del new_request.fields[SECURITY_TOKEN_HEADER]

        result = self.generate_signature(
            properties=new_properties, request=new_request, identity=identity
        )
        new_request.fields.set_field(
            Field(name="Authorization", values=[result.authorization])
        )
        if identity.session_token:
            new_request.fields.set_field(
                Field(name=SECURITY_TOKEN_HEADER, values=[identity.session_token])
            )
        return new_request

    def generate_signature(
        self,
        *,
        properties: SigV4SigningProperties,
        request: AWSRequest,
        identity: AWSCredentialsIdentity,
    ) -> SignatureResult:
        """Compute the signature of a request without modifying it.

        The request must already carry its ``Host`` and ``X-Amz-Date`` fields. The
        timestamp is taken from ``properties["date"]``, then from the request's
        ``X-Amz-Date`` field, and only then from the clock.
        """
        self._validate_identity(identity=identity)
        new_properties = self._normalize_signing_properties(
            properties=properties, request=request
        )
        assert "date" in new_properties
        amz_date = new_properties["date"]

        canonical = self.canonical_request(properties=new_properties, request=request)
        string_to_sign = self.string_to_sign(
            canonical_request=canonical.request, properties=new_properties
        )
        signing_key = derive_signing_key(
            secret_key=identity.secret_access_key,
            date_stamp=date_stamp(amz_date),
            region=new_properties["region"],
            service=new_properties["service"],
        )
        signature = hmac_sha256(signing_key, string_to_sign).hex()

        credential_scope = self.credential_scope(properties=new_properties)
        logger.debug(
            "Signed %s request with scope %s and signed headers %s.",
            request.method,
            credential_scope,
            canonical.signed_headers,
        )
        return SignatureResult(
            authorization=self.generate_authorization(
                credential=f"{identity.access_key_id}/{credential_scope}",
                signed_headers=canonical.signed_headers,
                signature=signature,
            ),
            amz_date=amz_date,
            credential_scope=credential_scope,
            signed_headers=canonical.signed_headers,
            signature=signature,
        )

    def generate_authorization(
        self, *, credential: str, signed_headers: str, signature: str
    ) -> str:
        """Generate the value of the `Authorization` field.

        :param credential:
            Credential scope string for generating the Authorization header.
            Defined as:
                <access_key>/<date>/<region>/<service>/<request_type>
        :param signed_headers:
            The ``;`` separated field names used in signing.
        :param signature:
            Final hash of the SigV4 signing algorithm generated from the
            canonical request and string to sign.
        """
        return (
            f"{SIGNING_ALGORITHM} Credential={credential}, "
            f"SignedHeaders={signed_headers}, Signature={signature}"
        )

    def canonical_request(
        self, *, properties: SigV4SigningProperties, request: AWSRequest
    ) -> CanonicalRequest:
        """Build the canonical request for ``request``.

        Useful to quickly compare inputs to find signature mismatches and
        unintended variances.
        """
        canonicalizer = RequestCanonicalizer(
            canonicalize_query=properties.get("canonicalize_query", True)
        )
        return canonicalizer.canonicalize(
            method=request.method,
            path=request.destination.path,
            query=request.destination.query,
            fields=request.fields,
            payload_hash=hash_payload(request.body),
        )

    def string_to_sign(
        self, *, canonical_request: str, properties: SigV4SigningProperties
    ) -> str:
        """The string to sign concatenates the formal identifier of our signing
        algorithm, the signing DateTime, the scope of our credentials, and a hash of
        our previously generated canonical request.

        The SigV4 specification defines the string to sign as:
            Algorithm \\n
            RequestDateTime \\n
            CredentialScope  \\n
            HashedCanonicalRequest
        """
        assert "date" in properties
        canonical_request_hash = hash_canonical_request(canonical_request)
        logger.debug("Canonical request hash: %s", canonical_request_hash)
        return (
            f"{SIGNING_ALGORITHM}\n"
            f"{properties['date']}\n"
            f"{self.credential_scope(properties=properties)}\n"
            f"{canonical_request_hash}"
        )

    def credential_scope(self, *, properties: SigV4SigningProperties) -> str:
        assert "date" in properties
        # Scope format: <YYYYMMDD>/<AWS Region>/<AWS Service>/aws4_request
        return (
            f"{date_stamp(properties['date'])}/{properties['region']}/"
            f"{properties['service']}/{SIGNING_KEY_TERMINATOR}"
        )

    def _validate_identity(self, *, identity: AWSCredentialsIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, AWSCredentialsIdentity):  # pyright: ignore
            raise MissingCredentialsError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        if not identity.access_key_id or not identity.secret_access_key:
            raise MissingCredentialsError(
                "Both an access key id and a secret access key are required to sign "
                "a request."
            )
        if identity.is_expired:
            raise ExpiredCredentialsError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )

    def _normalize_signing_properties(
        self,
        *,
        properties: SigV4SigningProperties,
        request: AWSRequest | None = None,
    ) -> SigV4SigningProperties:
        # Create copy of signing properties to avoid mutating the original
        new_properties = SigV4SigningProperties(**properties)
        if "date" not in new_properties:
            date_field = request.fields.get(AMZ_DATE_HEADER) if request else None
            if date_field is not None and date_field.values:
                new_properties["date"] = date_field.as_string()
            else:
                new_properties["date"] = format_amz_date(self._clock.now())
        return new_properties
