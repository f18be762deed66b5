"""
Sentry configuration and data scrubbing.

Sentry receives every unhandled error in production. Request data, extra
context and breadcrumbs are scrubbed before an event leaves the process so
that tokens, station credentials and customer contact details never reach it.
"""

import re
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.django import DjangoIntegration
from sentry_sdk.integrations.redis import RedisIntegration

# Sensitive field patterns to scrub
SENSITIVE_KEYS = {
    "password",
    "secret",
    "token",
    "api_key",
    "access_token",
    "refresh_token",
    "auth",
    "authorization",
    "cookie",
    "csrf",
    "session",
    "pin",
    "card_number",
}

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_PATTERN = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b")


def scrub_sensitive_data(data: Any) -> Any:
    """
    Recursively scrub sensitive data from dictionaries, lists, and strings.

    Args:
        data: Data to scrub (dict, list, str, or other)

    Returns:
        Scrubbed data with sensitive information masked
    """
    if isinstance(data, dict):
        return {
            key: "[REDACTED]" if _is_sensitive_key(key) else scrub_sensitive_data(value)
            for key, value in data.items()
        }
    elif isinstance(data, list):
        return [scrub_sensitive_data(item) for item in data]
    elif isinstance(data, str):
        return _scrub_string(data)
    else:
        return data


def _is_sensitive_key(key: str) -> bool:
    key_lower = str(key).lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)


def _scrub_string(text: str) -> str:
    text = EMAIL_PATTERN.sub("[EMAIL]", text)
    # Keep the last 4 digits of phone numbers for support lookups
    text = PHONE_PATTERN.sub(lambda m: f"XXX-XXX-{m.group(0)[-4:]}", text)
    return text


def before_send(event: Dict[str, Any], hint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Sentry before_send hook to scrub sensitive data from events.
    """
    if "request" in event:
        request = event["request"]

        if "headers" in request:
            request["headers"] = scrub_sensitive_data(request["headers"])

        if "cookies" in request:
            request["cookies"] = {k: "[REDACTED]" for k in request["cookies"]}

        if "query_string" in request:
            request["query_string"] = scrub_sensitive_data(request["query_string"])

        if "data" in request:
            request["data"] = scrub_sensitive_data(request["data"])

    if "extra" in event:
        event["extra"] = scrub_sensitive_data(event["extra"])

    if "user" in event:
        user = event["user"]
        if "email" in user:
            user["email"] = "[EMAIL]"
        if "ip_address" in user:
            user["ip_address"] = "XXX.XXX.XXX.XXX"

    if "breadcrumbs" in event and "values" in event["breadcrumbs"]:
        for breadcrumb in event["breadcrumbs"]["values"]:
            if "data" in breadcrumb:
                breadcrumb["data"] = scrub_sensitive_data(breadcrumb["data"])
            if "message" in breadcrumb and breadcrumb["message"]:
                breadcrumb["message"] = _scrub_string(breadcrumb["message"])

    return event


def initialize_sentry(
    dsn: Optional[str],
    environment: str = "development",
    traces_sample_rate: float = 0.1,
    release: Optional[str] = None,
) -> None:
    """
    Initialize Sentry SDK with Django and Redis integrations.

    Args:
        dsn: Sentry DSN. If None, Sentry is not initialized.
        environment: Environment name (development, production)
        traces_sample_rate: Percentage of transactions to trace (0.0 to 1.0)
        release: Release version string
    """
    if not dsn:
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        traces_sample_rate=traces_sample_rate,
        integrations=[
            DjangoIntegration(
                transaction_style="url",
                middleware_spans=True,
                cache_spans=True,
            ),
            RedisIntegration(),
        ],
        before_send=before_send,
        # Send default PII (we'll scrub it in before_send)
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )
