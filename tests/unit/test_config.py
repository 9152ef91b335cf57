import pytest
from polly_signers import PollySigningConfig
from polly_signers.exceptions import ConfigurationError


def test_defaults() -> None:
    config = PollySigningConfig().resolve(environment={})
    assert config.region == "us-east-1"
    assert config.service == "polly"
    assert config.endpoint_url is None
    assert config.source_of("region") == "default"


def test_constructor_wins_over_environment() -> None:
    config = PollySigningConfig(region="eu-west-1").resolve(
        environment={"AWS_REGION": "us-west-2"}
    )
    assert config.region == "eu-west-1"
    assert config.source_of("region") == "constructor"


@pytest.mark.parametrize(
    "environment,expected",
    [
        ({"AWS_REGION": "us-west-2"}, "us-west-2"),
        ({"AWS_DEFAULT_REGION": "ap-south-1"}, "ap-south-1"),
        ({"AWS_REGION": "us-west-2", "AWS_DEFAULT_REGION": "ap-south-1"}, "us-west-2"),
        ({"AWS_REGION": "", "AWS_DEFAULT_REGION": "ap-south-1"}, "ap-south-1"),
    ],
)
def test_region_from_environment(environment: dict[str, str], expected: str) -> None:
    config = PollySigningConfig().resolve(environment=environment)
    assert config.region == expected
    assert config.source_of("region") == "environment"


def test_endpoint_url_from_environment() -> None:
    config = PollySigningConfig().resolve(
        environment={"AWS_ENDPOINT_URL_POLLY": "http://localhost:4566"}
    )
    assert config.endpoint_url == "http://localhost:4566"
    assert config.source_of("endpoint_url") == "environment"


def test_resolves_lazily(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_REGION", "ca-central-1")
    assert PollySigningConfig().region == "ca-central-1"


def test_empty_region_passes_through_by_default() -> None:
    config = PollySigningConfig(region="").resolve(environment={})
    assert config.region == ""


def test_validation() -> None:
    with pytest.raises(ConfigurationError):
        PollySigningConfig(region="", validate=True).resolve(environment={})
    with pytest.raises(ConfigurationError):
        PollySigningConfig(service="", validate=True).resolve(environment={})
