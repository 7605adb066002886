import logging

import pytest
import requests

from pling.exceptions import AuthenticationFailed, DeliveryFailed, MissingConfiguration
from pling.gateway import C2DMGateway, GatewayState
from pling.gateway.c2dm import DEFAULT_AUTHENTICATION_URL, DEFAULT_PUSH_URL, collapse_key, extract_token
from pling.models import Device, Message

from tests.fakes import AUTH_URL, PUSH_URL, FakeTransport


@pytest.mark.parametrize("missing", ["email", "password", "source"])
def test_missing_credentials_fail_before_any_network_call(c2dm_config, transport, missing):
    del c2dm_config[missing]
    with pytest.raises(MissingConfiguration):
        C2DMGateway(c2dm_config)
    assert transport.requests == []


def test_defaults_point_at_production_endpoints(transport):
    transport.routes[DEFAULT_AUTHENTICATION_URL] = (200, "Auth=T0K")
    gw = C2DMGateway({"email": "a@b.com", "password": "p", "source": "s", "adapter": transport})
    assert gw.configuration["authentication_url"] == DEFAULT_AUTHENTICATION_URL
    assert gw.configuration["push_url"] == DEFAULT_PUSH_URL
    assert transport.requests[0].url == DEFAULT_AUTHENTICATION_URL


def test_authentication_reaches_ready_with_token(c2dm_config, transport):
    gw = C2DMGateway(c2dm_config)
    assert gw.state is GatewayState.READY
    assert gw.token == "XYZ123"

    (auth,) = transport.calls_to(AUTH_URL)
    assert auth.method == "POST"
    assert FakeTransport.form(auth) == {
        "accountType": "HOSTED_OR_GOOGLE",
        "service": "ac2dm",
        "Email": "a@b.com",
        "Passwd": "p",
        "source": "s",
    }


def test_authentication_with_plain_token_body(c2dm_config, transport):
    transport.routes[AUTH_URL] = (200, "Auth=XYZ123")
    assert C2DMGateway(c2dm_config).token == "XYZ123"


def test_token_extraction_failure(c2dm_config, transport):
    transport.routes[AUTH_URL] = (200, "SID=abc\nLSID=def")
    with pytest.raises(AuthenticationFailed) as exc:
        C2DMGateway(c2dm_config)
    assert "Token extraction failed" in str(exc.value)


def test_rejected_credentials(c2dm_config, transport):
    transport.routes[AUTH_URL] = (403, "Error=BadAuthentication")
    with pytest.raises(AuthenticationFailed) as exc:
        C2DMGateway(c2dm_config)
    assert "[403]" in str(exc.value)
    assert "BadAuthentication" in str(exc.value)


def test_transport_error_during_authentication(c2dm_config, transport):
    transport.error = requests.ConnectionError("connection refused")
    with pytest.raises(AuthenticationFailed):
        C2DMGateway(c2dm_config)


def test_delivery_posts_form_with_auth_header(c2dm_config, transport):
    gw = C2DMGateway(c2dm_config)
    gw.deliver(Message("Hello", badge=2, sound="default"), Device("tok1", "android"))

    (push,) = transport.calls_to(PUSH_URL)
    assert push.headers["Authorization"] == "GoogleLogin auth=XYZ123"
    assert push.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert FakeTransport.form(push) == {
        "registration_id": "tok1",
        "data.body": "Hello",
        "data.badge": "2",
        "data.sound": "default",
        "collapse_key": collapse_key("Hello"),
    }


def test_repeated_deliveries_do_not_reauthenticate(c2dm_config, transport):
    gw = C2DMGateway(c2dm_config)
    for body in ("a", "b", "c"):
        gw.deliver(Message(body), Device("tok1", "android"))
    assert len(transport.calls_to(AUTH_URL)) == 1
    assert len(transport.calls_to(PUSH_URL)) == 3


def test_payload_forwarded_only_when_enabled(c2dm_config, transport):
    message = Message("Hello", payload={"thread": "42", "from": "sam"})

    C2DMGateway(c2dm_config).deliver(message, Device("tok1", "android"))
    plain = FakeTransport.form(transport.calls_to(PUSH_URL)[-1])
    assert "data.thread" not in plain

    C2DMGateway({**c2dm_config, "payload": True}).deliver(message, Device("tok1", "android"))
    extended = FakeTransport.form(transport.calls_to(PUSH_URL)[-1])
    assert extended["data.thread"] == "42"
    assert extended["data.from"] == "sam"


def test_non_success_status_raises_delivery_failed(c2dm_config, transport):
    transport.routes[PUSH_URL] = (503, "Service Unavailable")
    gw = C2DMGateway(c2dm_config)
    msg, device = Message("Hello"), Device("tok1", "android")
    with pytest.raises(DeliveryFailed) as exc:
        gw.deliver(msg, device)
    err = exc.value
    assert err.pling_message is msg
    assert err.pling_device is device
    assert "[503]" in str(err)
    assert "Service Unavailable" in str(err)
    assert err.status == 503
    assert err.error_code is None


def test_error_marker_in_successful_response(c2dm_config, transport):
    transport.routes[PUSH_URL] = (200, "Error=QuotaExceeded")
    gw = C2DMGateway(c2dm_config)
    with pytest.raises(DeliveryFailed) as exc:
        gw.deliver(Message("Hello"), Device("tok1", "android"))
    # unknown backend codes stay a plain DeliveryFailed
    assert type(exc.value) is DeliveryFailed
    assert exc.value.error_code == "QuotaExceeded"
    assert "[200] Error=QuotaExceeded" in str(exc.value)


def test_timeout_surfaces_as_delivery_failed(c2dm_config, transport):
    gw = C2DMGateway(c2dm_config)
    transport.error = requests.Timeout("read timed out")
    msg = Message("Hello")
    with pytest.raises(DeliveryFailed) as exc:
        gw.deliver(msg, Device("tok1", "android"))
    assert exc.value.pling_message is msg
    assert isinstance(exc.value.__cause__, requests.Timeout)


def test_debug_logging_redacts_credentials(c2dm_config, caplog):
    with caplog.at_level(logging.INFO, logger="pling.gateway.c2dm"):
        gw = C2DMGateway({**c2dm_config, "debug": True})
        gw.deliver(Message("Hello"), Device("tok1", "android"))
    text = caplog.text
    assert "pling.c2dm.request" in text
    assert "pling.c2dm.response" in text
    assert "XYZ123" not in text
    assert "'Passwd': '***REDACTED***'" in text


def test_extract_token_helper():
    assert extract_token("SID=1\nAuth=abc\n") == "abc"
    with pytest.raises(AuthenticationFailed):
        extract_token("")


def test_default_timeout_reaches_the_transport(c2dm_config, transport):
    C2DMGateway(c2dm_config).deliver(Message("Hello"), Device("tok1", "android"))
    assert [o["timeout"] for o in transport.options] == [15, 15]


def test_partial_connection_options_keep_the_default_timeout(c2dm_config, transport):
    gw = C2DMGateway({**c2dm_config, "connection": {"headers": {"X-Trace": "1"}}})
    gw.deliver(Message("Hello"), Device("tok1", "android"))

    assert all(o["timeout"] == 15 for o in transport.options)
    (push,) = transport.calls_to(PUSH_URL)
    assert push.headers["X-Trace"] == "1"
    assert push.headers["Authorization"] == "GoogleLogin auth=XYZ123"


def test_explicit_timeout_wins(c2dm_config, transport):
    C2DMGateway({**c2dm_config, "connection": {"timeout": 2}})
    assert transport.options[0]["timeout"] == 2


def test_collapse_key_tolerates_missing_or_non_string_body(c2dm_config, transport):
    assert collapse_key(None) == collapse_key("")
    assert collapse_key(42) == collapse_key("42")

    gw = C2DMGateway(c2dm_config)
    gw.deliver(Message(None), Device("tok1", "android"))
    form = FakeTransport.form(transport.calls_to(PUSH_URL)[0])
    assert "data.body" not in form
    assert form["collapse_key"] == collapse_key("")


def test_debug_logging_keeps_collapse_key_visible(c2dm_config, caplog):
    with caplog.at_level(logging.INFO, logger="pling.gateway.c2dm"):
        C2DMGateway({**c2dm_config, "debug": True}).deliver(Message("Hello"), Device("tok1", "android"))
    assert f"'collapse_key': '{collapse_key('Hello')}'" in caplog.text
