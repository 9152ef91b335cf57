# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class SigningError(Exception):
    """Top-level exception to capture signing-related errors."""


class MissingCredentialsError(SigningError, ValueError):
    """The access key id or secret access key is absent or empty."""


class ExpiredCredentialsError(SigningError, ValueError):
    """The supplied credentials are past their expiration."""


class CredentialsUnavailableError(SigningError):
    """A credentials resolver was unable to produce credentials."""


class ConfigurationError(SigningError, ValueError):
    """A configuration value failed validation."""
