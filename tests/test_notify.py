"""Tests for EmailJS confirmation emails."""

import json

import httpx

from walkathon.notify import EMAILJS_SEND_URL, ConfirmationEmailer
from walkathon.participant import Participant


def anu():
    return Participant(id=42, first_name="Anu", last_name="CK", email="anu@x.com",
                       phone="(408) 368-7230", emergency_phone="(408) 555-0199")


def email_config(config):
    config.emailjs_service_id = "service_1"
    config.emailjs_template_id = "template_1"
    config.emailjs_public_key = "public_1"
    config.event.date = "Saturday, August 16, 2025"
    return config


class TestConfirmationEmailer:
    def test_unconfigured_skips_sending(self, config, mock_http):
        def handler(request):
            raise AssertionError("no request expected")

        emailer = ConfirmationEmailer(config, client=mock_http(handler))
        assert not emailer.configured
        assert emailer.send(anu()) is False

    def test_sends_template_params(self, config, mock_http):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, text="OK")

        emailer = ConfirmationEmailer(email_config(config), client=mock_http(handler))
        assert emailer.send(anu()) is True

        request = requests[0]
        assert str(request.url) == EMAILJS_SEND_URL
        payload = json.loads(request.content)
        assert payload["service_id"] == "service_1"
        assert payload["template_id"] == "template_1"
        assert payload["user_id"] == "public_1"
        params = payload["template_params"]
        assert params["to_email"] == "anu@x.com"
        assert params["to_name"] == "Anu CK"
        assert params["event_date"] == "Saturday, August 16, 2025"
        assert params["additional_party"] == "None"
        assert params["emergency_contact"] == "Not provided"
        assert params["emergency_phone"] == "(408) 555-0199"

    def test_http_error_returns_false(self, config, mock_http, caplog):
        emailer = ConfirmationEmailer(
            email_config(config), client=mock_http(lambda request: httpx.Response(400))
        )

        assert emailer.send(anu()) is False
        assert "Confirmation email to anu@x.com failed" in caplog.text

    def test_malformed_endpoint_returns_false(self, config, mock_http, monkeypatch):
        monkeypatch.setattr("walkathon.notify.EMAILJS_SEND_URL", "https://exa mple.com:notaport/send")
        emailer = ConfirmationEmailer(
            email_config(config), client=mock_http(lambda request: httpx.Response(200))
        )

        assert emailer.send(anu()) is False
