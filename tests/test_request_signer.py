"""Tests for SLS request signing."""

import base64
import hashlib
import hmac

import pytest

from sls_shipper.exceptions import SigningError
from sls_shipper.signer import api_sign, authorization_header, build_sign_string, canonicalize_headers, canonicalize_resource

SECRET = "test-key-secret"
RESOURCE = "/logstores/app-logs/shards/lb"


def base_headers() -> dict:
    return {
        "x-log-apiversion": "0.6.0",
        "Content-Type": "application/x-protobuf",
        "Content-MD5": "1B2M2Y8ASGTPGRWHGDQVVA==",
        "x-log-signaturemethod": "hmac-sha1",
        "Content-Length": "10",
        "x-log-bodyrawsize": "0",
        "Host": "cn-hangzhou.log.aliyuncs.com",
        "Date": "Mon, 02 Jan 2006 15:04:05 GMT",
    }


def test_build_sign_string_orders_fields():
    expected = "\n".join(
        [
            "POST",
            "1B2M2Y8ASGTPGRWHGDQVVA==",
            "application/x-protobuf",
            "Mon, 02 Jan 2006 15:04:05 GMT",
            "x-log-apiversion:0.6.0",
            "x-log-bodyrawsize:0",
            "x-log-signaturemethod:hmac-sha1",
            RESOURCE,
        ]
    )

    assert build_sign_string("post", base_headers(), RESOURCE) == expected


def test_api_sign_is_base64_hmac_sha1_of_sign_string():
    sign_string = build_sign_string("POST", base_headers(), RESOURCE)
    digest = hmac.new(SECRET.encode("utf-8"), sign_string.encode("utf-8"), hashlib.sha1).digest()

    assert api_sign(SECRET, "POST", base_headers(), RESOURCE) == base64.b64encode(digest).decode("ascii")


def test_api_sign_is_deterministic():
    first = api_sign(SECRET, "POST", base_headers(), RESOURCE)
    second = api_sign(SECRET, "POST", dict(reversed(list(base_headers().items()))), RESOURCE)

    assert first == second


def _with(**changes) -> dict:
    headers = base_headers()
    headers.update(changes)
    return headers


@pytest.mark.parametrize(
    "method, headers, resource, secret",
    [
        ("PUT", base_headers(), RESOURCE, SECRET),
        ("POST", _with(**{"Content-MD5": "1B2M2Y8ASGTPGRWHGDQVVB=="}), RESOURCE, SECRET),
        ("POST", _with(**{"Content-Type": "application/x-protobug"}), RESOURCE, SECRET),
        ("POST", _with(Date="Mon, 02 Jan 2006 15:04:06 GMT"), RESOURCE, SECRET),
        ("POST", _with(**{"x-log-apiversion": "0.6.1"}), RESOURCE, SECRET),
        ("POST", _with(**{"x-log-bodyrawsize": "1"}), RESOURCE, SECRET),
        ("POST", _with(**{"x-acs-security-token": "t"}), RESOURCE, SECRET),
        ("POST", base_headers(), "/logstores/app-logz/shards/lb", SECRET),
        ("POST", base_headers(), RESOURCE + "?type=log", SECRET),
        ("POST", base_headers(), RESOURCE, SECRET + "x"),
    ],
    ids=["method", "content-md5", "content-type", "date", "log-header", "raw-size", "acs-header", "path", "query", "secret"],
)
def test_api_sign_changes_with_any_signed_input(method, headers, resource, secret):
    baseline = api_sign(SECRET, "POST", base_headers(), RESOURCE)

    assert api_sign(secret, method, headers, resource) != baseline


def test_header_names_are_case_insensitive():
    headers = {key.upper(): value for key, value in base_headers().items()}

    assert api_sign(SECRET, "POST", headers, RESOURCE) == api_sign(SECRET, "POST", base_headers(), RESOURCE)


def test_missing_date_raises_signing_error():
    headers = base_headers()
    del headers["Date"]

    with pytest.raises(SigningError, match="Date"):
        api_sign(SECRET, "POST", headers, RESOURCE)


def test_empty_secret_raises_signing_error():
    with pytest.raises(SigningError):
        api_sign("", "POST", base_headers(), RESOURCE)


def test_missing_content_headers_sign_as_empty_lines():
    sign_string = build_sign_string("GET", {"Date": "d"}, "/logstores")

    assert sign_string == "GET\n\n\nd\n\n/logstores"


def test_canonicalize_headers_trims_lowercases_and_sorts():
    headers = {" X-Log-B ": " 2 ", "x-acs-a": "1", "Host": "ignored"}

    assert canonicalize_headers(headers) == "x-acs-a:1\nx-log-b:2"


def test_canonicalize_resource_sorts_query_keys():
    assert canonicalize_resource("/logstores/s?to=2&from=1&empty=") == "/logstores/s?empty=&from=1&to=2"
    assert canonicalize_resource("/logstores/s") == "/logstores/s"


def test_authorization_header_format():
    assert authorization_header("key-id", "c2lnbg==") == "LOG key-id:c2lnbg=="
