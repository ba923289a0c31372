"""Builders for the CQ codes a chat bot sends most often.

Each returns the serialized markup, ready to be embedded in message text.
"""

from typing import Optional, Union

from .code import CQCode

AT_ALL = "[CQ:at,qq=all]"


def image(file: str, type: Optional[str] = None) -> str:
    """Image code.

    Args:
        file: Local file URL, remote URL or file name known to the client
        type: "flash" or "show" for special display modes, None for normal
    """
    return str(CQCode("image", {"file": file, "type": type}))


def image_base64(data: str, type: Optional[str] = None) -> str:
    """Image code carrying the picture inline as base64."""
    return str(CQCode("image", {"file": f"base64://{data}", "type": type}))


def video(file: str, cover: Optional[str] = None) -> str:
    return str(CQCode("video", {"file": file, "cover": cover}))


def share(
    url: str,
    title: str,
    content: Optional[str] = None,
    image: Optional[str] = None,
) -> str:
    """Link share card."""
    return str(CQCode("share", {"url": url, "title": title, "content": content, "image": image}))


def at(qq: Union[int, str]) -> str:
    """Mention a single user."""
    return str(CQCode("at", {"qq": qq}))


def at_all() -> str:
    """Mention everyone in the group."""
    return AT_ALL


def reply(id: Union[int, str]) -> str:
    """Quote-reply to a message by its ID."""
    return str(CQCode("reply", {"id": id}))


def record(file: str) -> str:
    """Voice message."""
    return str(CQCode("record", {"file": file}))
