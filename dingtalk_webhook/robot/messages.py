"""Robot message payload models and builders.

Every message sent to a DingTalk robot is a JSON object tagged by
``msgtype``. Each payload model here carries only the fields of its own
message type, so serialization never includes empty substructures of
other types.
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from dingtalk_webhook.robot.errors import ValidationError, ValidationErrorKind

# 11-digit mainland China mobile number
MOBILE_PATTERN = re.compile(r"^1(?:[36789]\d|4[57]|5[0-35-9])\d{8}$")

MARKDOWN_MENTION_MARKER = "#####"


def is_mobile(value: str) -> bool:
    """Check whether a string is a mobile number that can be @-mentioned inline."""
    return MOBILE_PATTERN.fullmatch(value) is not None


def _flag(value: bool) -> str:
    return "1" if value else "0"


class _PayloadModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


# ============================================================================
# Message Parts
# ============================================================================


class AtBlock(_PayloadModel):
    """Members to notify with the message."""

    at_mobiles: list[str] = Field(
        default_factory=list,
        alias="atMobiles",
        description="Mobile numbers of members to @-mention",
    )
    is_at_all: bool = Field(
        default=False,
        alias="isAtAll",
        description="Mention everyone in the group",
    )


class TextContent(_PayloadModel):
    content: str


class LinkContent(_PayloadModel):
    title: str
    text: str
    pic_url: str = Field(default="", alias="picUrl")
    message_url: str = Field(default="", alias="messageUrl")


class MarkdownContent(_PayloadModel):
    title: str
    text: str


class ActionButton(_PayloadModel):
    """A single button of an independent-jump action card."""

    title: str
    action_url: str = Field(alias="actionURL")


class ActionCardContent(_PayloadModel):
    """Action card body.

    Either ``btns`` (one button per link) or ``singleTitle``/``singleURL``
    (the whole card is one action) is populated.
    """

    title: str
    text: str
    hide_avatar: str = Field(default="0", alias="hideAvatar")
    btn_orientation: str = Field(default="0", alias="btnOrientation")
    single_title: str | None = Field(default=None, alias="singleTitle")
    single_url: str | None = Field(default=None, alias="singleURL")
    buttons: list[ActionButton] | None = Field(default=None, alias="btns")


class FeedLink(_PayloadModel):
    """One entry of a feed card."""

    title: str
    message_url: str = Field(alias="messageURL")
    pic_url: str = Field(default="", alias="picURL")


class FeedCardContent(_PayloadModel):
    links: list[FeedLink] = Field(default_factory=list)


# ============================================================================
# Payloads
# ============================================================================


class RobotMessage(_PayloadModel):
    """Base class for robot message payloads."""

    msgtype: str

    def to_json_dict(self) -> dict[str, Any]:
        """Convert to the JSON object DingTalk expects.

        Returns:
            Dictionary using wire field names, without unset optional fields.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TextMessage(RobotMessage):
    msgtype: Literal["text"] = "text"
    text: TextContent
    at: AtBlock | None = None


class LinkMessage(RobotMessage):
    msgtype: Literal["link"] = "link"
    link: LinkContent


class MarkdownMessage(RobotMessage):
    msgtype: Literal["markdown"] = "markdown"
    markdown: MarkdownContent
    at: AtBlock | None = None


class ActionCardMessage(RobotMessage):
    msgtype: Literal["actionCard"] = "actionCard"
    action_card: ActionCardContent = Field(alias="actionCard")


class FeedCardMessage(RobotMessage):
    msgtype: Literal["feedCard"] = "feedCard"
    feed_card: FeedCardContent = Field(alias="feedCard")


Payload = Annotated[
    Union[TextMessage, LinkMessage, MarkdownMessage, ActionCardMessage, FeedCardMessage],
    Field(discriminator="msgtype"),
]


# ============================================================================
# Builders
# ============================================================================


def build_text_message(
    content: str,
    mention_all: bool = False,
    mobiles: Iterable[str] = (),
) -> TextMessage:
    """Build a text message.

    Args:
        content: Message text.
        mention_all: Whether to @ everyone.
        mobiles: Mobile numbers to @.

    Returns:
        Text message payload.
    """
    return TextMessage(
        text=TextContent(content=content),
        at=AtBlock(at_mobiles=list(mobiles), is_at_all=mention_all),
    )


def build_link_message(
    title: str,
    content: str,
    pic_url: str,
    message_url: str,
) -> LinkMessage:
    """Build a link message."""
    return LinkMessage(
        link=LinkContent(
            title=title,
            text=content,
            pic_url=pic_url,
            message_url=message_url,
        )
    )


def build_markdown_message(
    title: str,
    content: str,
    mention_all: bool = False,
    mobiles: Iterable[str] = (),
) -> MarkdownMessage:
    """Build a markdown message.

    Markdown messages only highlight a mention when ``@<mobile>`` appears
    in the text, so every recognised mobile number is appended to the
    content after a ``#####`` marker. All mobiles, recognised or not,
    are listed in the at block.

    Args:
        title: Conversation list preview title.
        content: Markdown text.
        mention_all: Whether to @ everyone.
        mobiles: Mobile numbers to @.

    Returns:
        Markdown message payload.
    """
    mobiles = list(mobiles)

    mentions = [f" @{mobile}" for mobile in mobiles if is_mobile(mobile)]
    if mentions:
        content += MARKDOWN_MENTION_MARKER + "".join(mentions)

    return MarkdownMessage(
        markdown=MarkdownContent(title=title, text=content),
        at=AtBlock(at_mobiles=mobiles, is_at_all=mention_all),
    )


def build_action_card_message(
    title: str,
    content: str,
    link_titles: Sequence[str],
    link_urls: Sequence[str],
    *,
    hide_avatar: bool = False,
    buttons_vertical: bool = False,
) -> ActionCardMessage:
    """Build an action card with one button per link.

    Args:
        title: Card title.
        content: Markdown card body.
        link_titles: Button labels.
        link_urls: Button targets, paired with ``link_titles`` by position.
        hide_avatar: Hide the robot avatar.
        buttons_vertical: Stack buttons vertically instead of side by side.

    Returns:
        Action card payload.

    Raises:
        ValidationError: If the lists differ in length, or are both empty.
    """
    counts = {"titles": len(link_titles), "urls": len(link_urls)}

    if len(link_titles) != len(link_urls):
        raise ValidationError(ValidationErrorKind.LENGTH_MISMATCH, details=counts)

    if not link_titles:
        raise ValidationError(ValidationErrorKind.EMPTY, details=counts)

    buttons = [
        ActionButton(title=link_title, action_url=link_url)
        for link_title, link_url in zip(link_titles, link_urls)
    ]

    return ActionCardMessage(
        action_card=ActionCardContent(
            title=title,
            text=content,
            hide_avatar=_flag(hide_avatar),
            btn_orientation=_flag(buttons_vertical),
            buttons=buttons,
        )
    )


def build_single_action_card_message(
    title: str,
    content: str,
    single_title: str,
    single_url: str,
    *,
    hide_avatar: bool = False,
    buttons_vertical: bool = False,
) -> ActionCardMessage:
    """Build an action card whose whole body is a single action."""
    return ActionCardMessage(
        action_card=ActionCardContent(
            title=title,
            text=content,
            hide_avatar=_flag(hide_avatar),
            btn_orientation=_flag(buttons_vertical),
            single_title=single_title,
            single_url=single_url,
        )
    )


def build_feed_card_message(
    links: Iterable[FeedLink | Mapping[str, Any]],
) -> FeedCardMessage:
    """Build a feed card.

    Args:
        links: Feed entries, as ``FeedLink`` or mappings with
            ``title``, ``message_url`` and ``pic_url`` keys.

    Returns:
        Feed card payload.
    """
    return FeedCardMessage(
        feed_card=FeedCardContent(
            links=[
                link if isinstance(link, FeedLink) else FeedLink.model_validate(link)
                for link in links
            ]
        )
    )
