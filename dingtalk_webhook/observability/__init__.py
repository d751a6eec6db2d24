"""Logging setup for applications using the robot client."""

from dingtalk_webhook.observability.logs import configure_logging

__all__ = ["configure_logging"]
