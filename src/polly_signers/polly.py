# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""Signed requests for the Amazon Polly REST API.

Requests are built and signed here but never sent; dispatching them is left to
whichever HTTP client the caller uses.
"""

import logging
from collections.abc import Mapping
from typing import Final
from urllib.parse import urlencode

from ._http import URI, AWSRequest, Field, Fields
from .config import PollySigningConfig
from .credentials_resolvers import EnvironmentCredentialsResolver
from .interfaces.identity import CredentialsResolver
from .signers import SigV4Signer, SigV4SigningProperties

logger: Final = logging.getLogger(__name__)

SYNTHESIZE_SPEECH_PATH = "/v1/speech"
DESCRIBE_VOICES_PATH = "/v1/voices"
JSON_CONTENT_TYPE = "application/x-amz-json-1.0"


def resolve_endpoint(config: PollySigningConfig) -> URI:
    """Resolve the Polly endpoint for the configured region.

    An explicit ``endpoint_url`` takes precedence over the regional endpoint.
    """
    if config.endpoint_url:
        return URI.from_url(config.endpoint_url)

    # TODO: use dns suffix determined from partition metadata
    dns_suffix = "amazonaws.com"
    return URI(host=f"polly.{config.region}.{dns_suffix}")


class PollyRequestSigner:
    """Creates signed requests against the Polly endpoint.

    Credentials are requested from the resolver on every call and never cached.

    :param config: Region, service and endpoint configuration.
    :param credentials_resolver: Source of credentials. Defaults to the
        environment.
    :param signer: The SigV4 signer to use.
    """

    def __init__(
        self,
        *,
        config: PollySigningConfig | None = None,
        credentials_resolver: CredentialsResolver | None = None,
        signer: SigV4Signer | None = None,
    ) -> None:
        self._config = config if config is not None else PollySigningConfig()
        self._credentials_resolver = (
            credentials_resolver
            if credentials_resolver is not None
            else EnvironmentCredentialsResolver()
        )
        self._signer = signer if signer is not None else SigV4Signer()

    def create_request(
        self,
        method: str,
        path: str,
        *,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        query: str | None = None,
    ) -> AWSRequest:
        """Build and sign a request for ``path`` on the Polly endpoint.

        :param method: HTTP method, for example ``POST``.
        :param path: Absolute, already percent-encoded path.
        :param body: Raw request body.
        :param headers: Extra headers to send and sign.
        :param query: Raw query string without the leading ``?``.
        """
        endpoint = resolve_endpoint(self._config)
        base_path = (endpoint.path or "").rstrip("/")
        destination = URI(
            scheme=endpoint.scheme,
            host=endpoint.host,
            port=endpoint.port,
            path=f"{base_path}{path}",
            query=query or None,
        )
        fields = Fields(
            [Field(name=k, values=[v]) for k, v in (headers or {}).items()]
        )
        request = AWSRequest(
            destination=destination, method=method, body=body, fields=fields
        )

        identity = self._credentials_resolver.get_identity()
        logger.debug("Signing %s %s for region %s.", method, path, self._config.region)
        return self._signer.sign(
            properties=SigV4SigningProperties(
                region=self._config.region, service=self._config.service
            ),
            request=request,
            identity=identity,
        )

    def create_synthesize_speech_request(self, payload: bytes) -> AWSRequest:
        """Sign a ``SynthesizeSpeech`` call carrying an already serialized JSON body."""
        return self.create_request(
            "POST",
            SYNTHESIZE_SPEECH_PATH,
            body=payload,
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

    def create_describe_voices_request(
        self, language_code: str | None = None
    ) -> AWSRequest:
        """Sign a ``DescribeVoices`` call, optionally filtered by language."""
        query = urlencode({"LanguageCode": language_code}) if language_code else None
        return self.create_request("GET", DESCRIBE_VOICES_PATH, query=query)
