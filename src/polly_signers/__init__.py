# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Polly Signers provides AWS Signature Version 4 request signing for calling
Amazon Polly, independent of any particular HTTP client."""

from __future__ import annotations

from ._http import AWSRequest, Field, Fields, URI
from ._identity import AWSCredentialIdentity
from .canonical import CanonicalRequest, RequestCanonicalizer
from .clock import Clock, FixedClock, SystemClock
from .config import PollySigningConfig
from .credentials_resolvers import (
    ChainedCredentialsResolver,
    EnvironmentCredentialsResolver,
    StaticCredentialsResolver,
)
from .keys import derive_signing_key
from .polly import PollyRequestSigner, resolve_endpoint
from .signers import SignatureResult, SigV4Signer, SigV4SigningProperties

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "URI",
    "AWSCredentialIdentity",
    "AWSRequest",
    "CanonicalRequest",
    "ChainedCredentialsResolver",
    "Clock",
    "EnvironmentCredentialsResolver",
    "Field",
    "Fields",
    "FixedClock",
    "PollyRequestSigner",
    "PollySigningConfig",
    "RequestCanonicalizer",
    "SigV4Signer",
    "SigV4SigningProperties",
    "SignatureResult",
    "StaticCredentialsResolver",
    "SystemClock",
    "derive_signing_key",
    "resolve_endpoint",
)
