"""DingTalk custom robot webhook client.

This module provides:
- WebHookClient: Sends messages to a group robot
- Message payload models and builders for every message type
- Request signing (HMAC-SHA256) and URL assembly
- The error hierarchy raised by sends
"""

from dingtalk_webhook.robot.client import DEFAULT_API_URL, WebHookClient, WebhookResponse
from dingtalk_webhook.robot.errors import (
    HTTPStatusError,
    MalformedResponseError,
    RemoteAPIError,
    TransportError,
    ValidationError,
    ValidationErrorKind,
    WebhookError,
)
from dingtalk_webhook.robot.messages import (
    MOBILE_PATTERN,
    ActionButton,
    ActionCardMessage,
    AtBlock,
    FeedCardMessage,
    FeedLink,
    LinkMessage,
    MarkdownMessage,
    Payload,
    RobotMessage,
    TextMessage,
    build_action_card_message,
    build_feed_card_message,
    build_link_message,
    build_markdown_message,
    build_single_action_card_message,
    build_text_message,
    is_mobile,
)
from dingtalk_webhook.robot.security import (
    add_params_to_url,
    build_request_url,
    generate_sign,
)

__all__ = [
    # Client
    "DEFAULT_API_URL",
    "WebHookClient",
    "WebhookResponse",
    # Errors
    "WebhookError",
    "TransportError",
    "HTTPStatusError",
    "MalformedResponseError",
    "RemoteAPIError",
    "ValidationError",
    "ValidationErrorKind",
    # Messages
    "MOBILE_PATTERN",
    "ActionButton",
    "ActionCardMessage",
    "AtBlock",
    "FeedCardMessage",
    "FeedLink",
    "LinkMessage",
    "MarkdownMessage",
    "Payload",
    "RobotMessage",
    "TextMessage",
    "build_action_card_message",
    "build_feed_card_message",
    "build_link_message",
    "build_markdown_message",
    "build_single_action_card_message",
    "build_text_message",
    "is_mobile",
    # Security
    "add_params_to_url",
    "build_request_url",
    "generate_sign",
]
