"""
AnonBoard Data Models

Internal records held by the store, and the redacted views handed out
to callers. Views never carry the delete password hash or the
reported flag.
"""

from dataclasses import dataclass, field
from typing import Any

from ..utils.formatting import format_iso


@dataclass
class Reply:
    """Reply record, owned by exactly one thread."""
    reply_id: int = 0
    thread_id: int = 0
    text: str = ""
    delete_password: str = ""  # Argon2id hash string
    created_at_us: int = 0
    reported: bool = False


@dataclass
class Thread:
    """Thread record with its replies."""
    thread_id: int = 0
    board: str = ""
    text: str = ""
    delete_password: str = ""  # Argon2id hash string
    created_at_us: int = 0
    bumped_at_us: int = 0
    reported: bool = False
    replies: list[Reply] = field(default_factory=list)

    def find_reply(self, reply_id: int) -> Reply | None:
        """Return the reply with the given id, or None."""
        for reply in self.replies:
            if reply.reply_id == reply_id:
                return reply
        return None


@dataclass(frozen=True)
class ReplyView:
    """Outward-facing reply."""
    reply_id: int
    thread_id: int
    text: str
    created_at_us: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "reply_id": self.reply_id,
            "thread_id": self.thread_id,
            "text": self.text,
            "created_on": format_iso(self.created_at_us),
        }


@dataclass(frozen=True)
class ThreadView:
    """Outward-facing thread with a (possibly truncated) list of replies."""
    thread_id: int
    board: str
    text: str
    created_at_us: int
    bumped_at_us: int
    replies: tuple[ReplyView, ...] = ()
    reply_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "thread_id": self.thread_id,
            "board": self.board,
            "text": self.text,
            "created_on": format_iso(self.created_at_us),
            "bumped_on": format_iso(self.bumped_at_us),
            "replies": [reply.to_dict() for reply in self.replies],
            "reply_count": self.reply_count,
        }


def reply_to_view(reply: Reply) -> ReplyView:
    """Project a reply record to its redacted view."""
    return ReplyView(
        reply_id=reply.reply_id,
        thread_id=reply.thread_id,
        text=reply.text,
        created_at_us=reply.created_at_us,
    )


def thread_to_view(thread: Thread, reply_limit: int | None = None) -> ThreadView:
    """
    Project a thread record to its redacted view.

    Replies are ordered newest first and cut to reply_limit when given.
    """
    replies = sorted(
        thread.replies,
        key=lambda r: (r.created_at_us, r.reply_id),
        reverse=True
    )
    if reply_limit is not None:
        replies = replies[:reply_limit]

    return ThreadView(
        thread_id=thread.thread_id,
        board=thread.board,
        text=thread.text,
        created_at_us=thread.created_at_us,
        bumped_at_us=thread.bumped_at_us,
        replies=tuple(reply_to_view(r) for r in replies),
        reply_count=len(thread.replies),
    )
