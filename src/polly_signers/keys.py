# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import hmac
from hashlib import sha256

SIGNING_KEY_TERMINATOR = "aws4_request"


def hmac_sha256(key: bytes, value: str) -> bytes:
    return hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()


def derive_signing_key(
    *, secret_key: str, date_stamp: str, region: str, service: str
) -> bytes:
    """Derive the signing key scoped to one date, region and service.

    In SigV4, a signing key is created that is scoped to a specific region and
    service. Each step keys the next HMAC with the previous digest::

        DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
        DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
        DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
        SigningKey           = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")

    :param secret_key: The long-term secret access key.
    :param date_stamp: The date in ``YYYYMMDD`` form.
    :param region: Region name, for example ``us-east-1``.
    :param service: Signing name of the service, for example ``polly``.
    """
    k_date = hmac_sha256(f"AWS4{secret_key}".encode(), date_stamp)
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, SIGNING_KEY_TERMINATOR)
