"""Client for DingTalk group chat robot webhooks."""

from dingtalk_webhook.robot import (
    HTTPStatusError,
    MalformedResponseError,
    RemoteAPIError,
    TransportError,
    ValidationError,
    WebHookClient,
    WebhookError,
)

__all__ = [
    "WebHookClient",
    "WebhookError",
    "TransportError",
    "HTTPStatusError",
    "MalformedResponseError",
    "RemoteAPIError",
    "ValidationError",
]

__version__ = "0.1.0"
