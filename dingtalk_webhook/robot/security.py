"""Robot request signing and URL assembly.

DingTalk robots with "additional signature" enabled require two query
parameters on every request:

    timestamp = current time in milliseconds
    sign      = base64(HMAC-SHA256(secret, timestamp + "\\n" + secret))
"""

import base64
import hashlib
import hmac
import time
from collections.abc import Mapping
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

import structlog

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_PARAM = "access_token"
TIMESTAMP_PARAM = "timestamp"
SIGN_PARAM = "sign"


def current_timestamp_ms() -> str:
    """Return the current Unix time in milliseconds as a decimal string."""
    return str(int(time.time() * 1000))


def generate_sign(
    secret: str,
    *,
    timestamp: str | int | None = None,
) -> tuple[str, str]:
    """Generate the robot request signature.

    The signature is computed as:
    base64(HMAC-SHA256(secret, timestamp + "\\n" + secret))

    Args:
        secret: Robot secret key (the ``SEC...`` value).
        timestamp: Optional millisecond timestamp (defaults to now).

    Returns:
        Tuple of (timestamp, base64_signature).
    """
    if timestamp is None:
        timestamp = current_timestamp_ms()
    timestamp = str(timestamp)

    string_to_sign = f"{timestamp}\n{secret}"

    digest = hmac.new(
        secret.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    sign = base64.b64encode(digest).decode("ascii")

    logger.debug("webhook_signature_generated", timestamp=timestamp)

    return timestamp, sign


def add_params_to_url(url: str, params: Mapping[str, str]) -> str:
    """Set query parameters on a URL.

    Existing query parameters are preserved; keys present in ``params``
    replace every existing value for that key. New keys are appended in
    the order given.

    Args:
        url: Original URL, possibly with a query string.
        params: Parameters to set.

    Returns:
        URL with the merged query string.
    """
    parts = urlsplit(url)
    query = parse_qs(parts.query, keep_blank_values=True)

    for key, value in params.items():
        query[key] = [value]

    return urlunsplit(parts._replace(query=urlencode(query, doseq=True)))


def build_request_url(
    access_token: str,
    api_url: str,
    secret: str | None = None,
    *,
    timestamp: str | int | None = None,
) -> str:
    """Resolve the final endpoint URL for a robot request.

    If ``access_token`` already contains ``api_url`` it is taken as the
    complete endpoint URL. Otherwise it is sent as the ``access_token``
    query parameter of ``api_url``. When ``secret`` is set, ``timestamp``
    and ``sign`` parameters are added.

    Args:
        access_token: Bare token, or a full webhook URL.
        api_url: Robot API base URL.
        secret: Optional signing secret.
        timestamp: Optional millisecond timestamp used for signing.

    Returns:
        URL to POST the message to.
    """
    params: dict[str, str] = {}

    if api_url in access_token:
        url = access_token
    else:
        params[ACCESS_TOKEN_PARAM] = access_token
        url = api_url

    if secret:
        params[TIMESTAMP_PARAM], params[SIGN_PARAM] = generate_sign(
            secret, timestamp=timestamp
        )

    if params:
        url = add_params_to_url(url, params)

    return url
