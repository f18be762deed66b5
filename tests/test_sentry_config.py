"""
Tests for Sentry initialisation and event scrubbing.
"""

from unittest.mock import patch

from django.test import SimpleTestCase

from apps.core.sentry_config import (
    _is_sensitive_key,
    _scrub_string,
    before_send,
    initialize_sentry,
    scrub_sensitive_data,
)


class TestSensitiveDataScrubbing(SimpleTestCase):
    """Test sensitive data scrubbing functions"""

    def test_is_sensitive_key(self):
        self.assertTrue(_is_sensitive_key("password"))
        self.assertTrue(_is_sensitive_key("REFRESH_TOKEN"))
        self.assertTrue(_is_sensitive_key("station_pin"))
        self.assertTrue(_is_sensitive_key("Authorization"))

        self.assertFalse(_is_sensitive_key("username"))
        self.assertFalse(_is_sensitive_key("business_type"))
        self.assertFalse(_is_sensitive_key("station"))

    def test_scrub_string(self):
        scrubbed = _scrub_string("Owner jane@glownails.com called from 512-555-0199")

        self.assertIn("[EMAIL]", scrubbed)
        self.assertIn("XXX-XXX-0199", scrubbed)
        self.assertNotIn("glownails", scrubbed)

    def test_nested_structures(self):
        data = {
            "station": {"name": "REGISTER-1", "pairing_token": "abc123"},
            "users": [{"username": "jane", "password": "secret"}],
        }

        scrubbed = scrub_sensitive_data(data)

        self.assertEqual(scrubbed["station"]["name"], "REGISTER-1")
        self.assertEqual(scrubbed["station"]["pairing_token"], "[REDACTED]")
        self.assertEqual(scrubbed["users"][0]["password"], "[REDACTED]")


class TestBeforeSendHook(SimpleTestCase):
    """Test Sentry before_send hook"""

    def test_scrubs_request(self):
        event = {
            "request": {
                "headers": {"Authorization": "Bearer token123", "User-Agent": "POS/2.1"},
                "cookies": {"sessionid": "abc123"},
                "data": {"username": "jane", "password": "secret123"},
            }
        }

        result = before_send(event, {})

        self.assertEqual(result["request"]["headers"]["Authorization"], "[REDACTED]")
        self.assertEqual(result["request"]["headers"]["User-Agent"], "POS/2.1")
        self.assertEqual(result["request"]["cookies"]["sessionid"], "[REDACTED]")
        self.assertEqual(result["request"]["data"]["password"], "[REDACTED]")

    def test_scrubs_user_and_breadcrumbs(self):
        event = {
            "user": {"id": "7", "email": "jane@example.com", "ip_address": "10.0.0.8"},
            "breadcrumbs": {
                "values": [
                    {"message": "Sent receipt to jane@example.com", "data": {"token": "t"}}
                ]
            },
        }

        result = before_send(event, {})

        self.assertEqual(result["user"]["id"], "7")
        self.assertEqual(result["user"]["email"], "[EMAIL]")
        self.assertEqual(result["user"]["ip_address"], "XXX.XXX.XXX.XXX")
        breadcrumb = result["breadcrumbs"]["values"][0]
        self.assertEqual(breadcrumb["message"], "Sent receipt to [EMAIL]")
        self.assertEqual(breadcrumb["data"]["token"], "[REDACTED]")


class TestSentryInitialization(SimpleTestCase):
    """Test Sentry initialization"""

    @patch("apps.core.sentry_config.sentry_sdk.init")
    def test_initialize_with_dsn(self, mock_init):
        initialize_sentry(
            dsn="https://example@sentry.io/123456",
            environment="production",
            traces_sample_rate=0.2,
            release="1.0.0",
        )

        mock_init.assert_called_once()
        kwargs = mock_init.call_args.kwargs
        self.assertEqual(kwargs["environment"], "production")
        self.assertEqual(kwargs["traces_sample_rate"], 0.2)
        self.assertIs(kwargs["before_send"], before_send)
        self.assertFalse(kwargs["send_default_pii"])

    @patch("apps.core.sentry_config.sentry_sdk.init")
    def test_no_dsn_skips_initialization(self, mock_init):
        initialize_sentry(dsn=None)

        mock_init.assert_not_called()
