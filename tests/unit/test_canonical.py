import pytest
from polly_signers import Field, Fields, RequestCanonicalizer
from polly_signers.canonical import (
    EMPTY_SHA256_HASH,
    hash_canonical_request,
    hash_payload,
)

BODY = b'{"Text":"hi"}'
BODY_HASH = "a8d48ba9bd1a7f6121d86ef3610e5ad8a98bf7c128ad3c8da244db5b723271e0"


def _fields(*pairs: tuple[str, str]) -> Fields:
    return Fields.from_pairs(pairs)


def _canonicalize(
    fields: Fields,
    *,
    method: str = "POST",
    path: str | None = "/v1/speech",
    query: str | None = None,
    body: bytes | None = BODY,
    canonicalizer: RequestCanonicalizer | None = None,
):
    canonicalizer = canonicalizer or RequestCanonicalizer()
    return canonicalizer.canonicalize(
        method=method,
        path=path,
        query=query,
        fields=fields,
        payload_hash=hash_payload(body),
    )


def test_empty_payload_hash() -> None:
    assert hash_payload(None) == EMPTY_SHA256_HASH
    assert hash_payload(b"") == EMPTY_SHA256_HASH
    assert (
        EMPTY_SHA256_HASH
        == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_payload_hash() -> None:
    assert hash_payload(BODY) == BODY_HASH


def test_canonical_request_layout() -> None:
    canonical = _canonicalize(
        _fields(
            ("Host", "polly.us-east-1.amazonaws.com"),
            ("Content-Type", "application/x-amz-json-1.0"),
            ("X-Amz-Date", "20240101T000000Z"),
        )
    )
    assert canonical.request == (
        "POST\n"
        "/v1/speech\n"
        "\n"
        "content-type:application/x-amz-json-1.0\n"
        "host:polly.us-east-1.amazonaws.com\n"
        "x-amz-date:20240101T000000Z\n"
        "\n"
        "content-type;host;x-amz-date\n"
        f"{BODY_HASH}"
    )
    assert canonical.signed_headers == "content-type;host;x-amz-date"
    assert (
        hash_canonical_request(canonical.request)
        == "eb1e4aaf86f1a8b44e1bbf07d320a9657ec681f3fe74414e3a008f2a16215fc6"
    )


def test_header_order_does_not_matter() -> None:
    pairs = [
        ("Host", "polly.us-east-1.amazonaws.com"),
        ("X-Amz-Date", "20240101T000000Z"),
        ("Content-Type", "application/x-amz-json-1.0"),
        ("X-Custom", "value"),
    ]
    forward = _canonicalize(_fields(*pairs))
    backward = _canonicalize(_fields(*reversed(pairs)))
    assert forward == backward


def test_repeated_values_join_with_comma() -> None:
    fields = Fields(
        [
            Field(name="Host", values=["example.com"]),
            Field(name="X-Multi", values=["a", "  b   c ", "d"]),
        ]
    )
    canonical = _canonicalize(fields)
    assert "x-multi:a,b c,d\n" in canonical.request


def test_whitespace_only_differences_sign_identically() -> None:
    spaced = _canonicalize(_fields(("Host", "example.com"), ("X-A", " a  \t b ")))
    single = _canonicalize(_fields(("Host", "example.com"), ("X-A", "a b")))
    assert spaced.request == single.request
    assert "x-a:a b\n" in spaced.request


def test_header_names_are_lowercased() -> None:
    fields = Fields(
        [
            Field(name="Host", values=["example.com"]),
            Field(name="X-Foo", values=["1"]),
        ]
    )
    canonical = _canonicalize(fields)
    assert canonical.signed_headers == "host;x-foo"


def test_authorization_is_not_signed() -> None:
    canonical = _canonicalize(
        _fields(("Host", "example.com"), ("Authorization", "AWS4-HMAC-SHA256 stale"))
    )
    assert canonical.signed_headers == "host"
    assert "authorization" not in canonical.request


def test_missing_host_still_canonicalizes() -> None:
    canonical = _canonicalize(_fields(("X-Amz-Date", "20240101T000000Z")))
    assert canonical.signed_headers == "x-amz-date"


def test_no_trailing_newline() -> None:
    canonical = _canonicalize(_fields(("Host", "example.com")), body=None)
    assert canonical.request.endswith(EMPTY_SHA256_HASH)
    assert canonical.request.split("\n")[3] == "host:example.com"


@pytest.mark.parametrize(
    "path,expected",
    [
        (None, "/"),
        ("", ""),
        ("/v1/lexicons/my%20lexicon", "/v1/lexicons/my%20lexicon"),
    ],
)
def test_path_is_not_reencoded(path: str | None, expected: str) -> None:
    canonicalizer = RequestCanonicalizer()
    assert canonicalizer.format_path(path) == expected


@pytest.mark.parametrize(
    "query,expected",
    [
        (None, ""),
        ("", ""),
        ("LanguageCode=en-US", "LanguageCode=en-US"),
        ("b=2&a=1", "a=1&b=2"),
        ("a=2&a=1", "a=1&a=2"),
        ("Text=hello+world", "Text=hello%20world"),
        ("c=%7Eok&flag=", "c=~ok&flag="),
        ("NextToken=a/b", "NextToken=a%2Fb"),
    ],
)
def test_query_canonicalization(query: str | None, expected: str) -> None:
    assert RequestCanonicalizer().format_query(query) == expected


def test_raw_query_mode() -> None:
    canonicalizer = RequestCanonicalizer(canonicalize_query=False)
    assert canonicalizer.format_query("b=2&a=1") == "b=2&a=1"


@pytest.mark.parametrize(
    "changes",
    [
        {"method": "PUT"},
        {"path": "/v1/speech/"},
        {"query": "a=1"},
        {"body": b'{"Text":"ho"}'},
    ],
)
def test_changing_any_input_changes_canonical_request(changes: dict) -> None:
    fields = _fields(("Host", "example.com"))
    assert _canonicalize(fields, **changes) != _canonicalize(fields)


def test_changing_header_value_changes_canonical_request() -> None:
    original = _canonicalize(_fields(("Host", "example.com"), ("X-A", "1")))
    changed = _canonicalize(_fields(("Host", "example.com"), ("X-A", "2")))
    assert original.request != changed.request
