"""DingTalk custom robot webhook client.

Sends text, link, markdown, action card and feed card messages to a
group chat robot. Every send goes through ``WebHookClient.dispatch``,
which resolves the endpoint URL, signs the request when a secret is
configured, and interprets DingTalk's ``{"errcode", "errmsg"}`` reply.

Example:
    client = WebHookClient("your-access-token")
    client.secret = "SEC..."
    await client.send_text("Deploy finished", False, "13800138000")
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any
from urllib.parse import urlsplit

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from dingtalk_webhook.config import DEFAULT_API_URL, Settings
from dingtalk_webhook.robot.errors import (
    HTTPStatusError,
    MalformedResponseError,
    RemoteAPIError,
    TransportError,
)
from dingtalk_webhook.robot.messages import (
    FeedLink,
    Payload,
    build_action_card_message,
    build_feed_card_message,
    build_link_message,
    build_markdown_message,
    build_single_action_card_message,
    build_text_message,
)
from dingtalk_webhook.robot.security import build_request_url

logger = structlog.get_logger(__name__)


class WebhookResponse(BaseModel):
    """DingTalk robot API reply."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    error_code: int = Field(default=0, alias="errcode")
    error_message: str = Field(default="", alias="errmsg")


def _loggable_url(url: str) -> str:
    """Strip the query string, which carries the token and signature."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


class WebHookClient:
    """Client for a single DingTalk group robot.

    Attributes:
        access_token: Robot access token, or the complete webhook URL.
        api_url: Robot API base URL.
        secret: Optional signing secret. Requests are signed when set.
        timeout: Optional HTTP timeout in seconds. ``None`` disables it.
    """

    def __init__(
        self,
        access_token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        secret: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: Robot access token, or the complete webhook URL
                (``https://oapi.dingtalk.com/robot/send?access_token=...``).
            api_url: Robot API base URL.
            secret: Optional signing secret.
            timeout: Optional HTTP timeout in seconds.
        """
        self.access_token = access_token
        self.api_url = api_url
        self.secret = secret
        self.timeout = timeout
        self._logger = logger.bind(component="webhook_client")

    @classmethod
    def from_settings(cls, settings: Settings) -> "WebHookClient":
        """Create a client from application settings.

        Args:
            settings: Loaded settings.

        Returns:
            Configured client.
        """
        return cls(
            settings.DINGTALK_ACCESS_TOKEN,
            api_url=settings.DINGTALK_API_URL,
            secret=settings.DINGTALK_SECRET,
            timeout=settings.DINGTALK_TIMEOUT,
        )

    def reset_api_url(self) -> None:
        """Restore the default API base URL."""
        self.api_url = DEFAULT_API_URL

    async def dispatch(self, payload: Payload) -> None:
        """Send a message payload to the robot.

        Args:
            payload: Message to send.

        Raises:
            TransportError: If the request could not be made.
            HTTPStatusError: If the response status is not 200.
            MalformedResponseError: If the response body is not the expected JSON.
            RemoteAPIError: If DingTalk reports a non-zero errcode.
        """
        url = build_request_url(self.access_token, self.api_url, self.secret)
        body = payload.to_json_dict()

        self._logger.debug(
            "webhook_request",
            msgtype=payload.msgtype,
            url=_loggable_url(url),
            signed=bool(self.secret),
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    json=body,
                    headers={"Content-Type": "application/json"},
                )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise TransportError(e) from e

        if response.status_code != 200:
            raise HTTPStatusError(response.status_code)

        raw_body = response.text
        try:
            result = WebhookResponse.model_validate_json(raw_body)
        except PydanticValidationError as e:
            raise MalformedResponseError(raw_body, e) from e

        if result.error_code != 0:
            raise RemoteAPIError(result.error_code, result.error_message)

        self._logger.info(
            "webhook_sent",
            msgtype=payload.msgtype,
            status_code=response.status_code,
        )

    async def send_text(
        self,
        content: str,
        mention_all: bool = False,
        *mobiles: str,
    ) -> None:
        """Send a text message.

        Args:
            content: Message text.
            mention_all: Whether to @ everyone.
            *mobiles: Mobile numbers to @.
        """
        await self.dispatch(build_text_message(content, mention_all, mobiles))

    async def send_link(
        self,
        title: str,
        content: str,
        pic_url: str,
        message_url: str,
    ) -> None:
        """Send a link message.

        Args:
            title: Link title.
            content: Link summary text.
            pic_url: Thumbnail image URL.
            message_url: URL opened on click.
        """
        await self.dispatch(build_link_message(title, content, pic_url, message_url))

    async def send_markdown(
        self,
        title: str,
        content: str,
        mention_all: bool = False,
        *mobiles: str,
    ) -> None:
        """Send a markdown message.

        Recognised mobile numbers are also appended to the text as
        ``@<mobile>`` so DingTalk highlights them.

        Args:
            title: Conversation list preview title.
            content: Markdown text.
            mention_all: Whether to @ everyone.
            *mobiles: Mobile numbers to @.
        """
        await self.dispatch(build_markdown_message(title, content, mention_all, mobiles))

    async def send_action_card(
        self,
        title: str,
        content: str,
        link_titles: Sequence[str],
        link_urls: Sequence[str],
        hide_avatar: bool = False,
        buttons_vertical: bool = False,
    ) -> None:
        """Send an action card with one button per link.

        Args:
            title: Card title.
            content: Markdown card body.
            link_titles: Button labels.
            link_urls: Button targets, paired with ``link_titles``.
            hide_avatar: Hide the robot avatar.
            buttons_vertical: Stack buttons vertically.

        Raises:
            ValidationError: If the lists are empty or differ in length.
                Nothing is sent in that case.
        """
        message = build_action_card_message(
            title,
            content,
            link_titles,
            link_urls,
            hide_avatar=hide_avatar,
            buttons_vertical=buttons_vertical,
        )
        await self.dispatch(message)

    async def send_single_action_card(
        self,
        title: str,
        content: str,
        single_title: str,
        single_url: str,
        hide_avatar: bool = False,
        buttons_vertical: bool = False,
    ) -> None:
        """Send an action card that opens ``single_url`` when clicked."""
        message = build_single_action_card_message(
            title,
            content,
            single_title,
            single_url,
            hide_avatar=hide_avatar,
            buttons_vertical=buttons_vertical,
        )
        await self.dispatch(message)

    async def send_feed_card(
        self,
        links: Iterable[FeedLink | Mapping[str, Any]],
    ) -> None:
        """Send a feed card.

        Args:
            links: Feed entries.
        """
        await self.dispatch(build_feed_card_message(links))
