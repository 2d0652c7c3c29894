"""
AnonBoard Board Service

Thread and reply operations: posting, listing, reporting and
password-gated deletion. Every result handed out is a redacted view.
"""

import re
import time
import logging
from typing import Optional

from ..config import BoardConfig
from ..db.models import ThreadView, ReplyView, thread_to_view, reply_to_view
from ..db.store import ThreadStore
from ..utils.formatting import format_uptime, truncate
from .crypto import SecretHasher
from .errors import ValidationError, NotFoundError, ForbiddenError

logger = logging.getLogger(__name__)


class BoardService:
    """
    Anonymous board service.

    Features:
    - Threads bumped to the top by new replies
    - Listings capped per board and per thread
    - Reporting without a password
    - Deletion gated by the poster's delete password
    """

    def __init__(
        self,
        store: Optional[ThreadStore] = None,
        hasher: Optional[SecretHasher] = None,
        config: Optional[BoardConfig] = None
    ):
        self.store = store if store is not None else ThreadStore()
        self.hasher = hasher if hasher is not None else SecretHasher()
        self.config = config if config is not None else BoardConfig()
        self._name_re = re.compile(self.config.name_pattern) if self.config.name_pattern else None
        self.start_time = time.time()

    def _require(self, value: Optional[str], field_name: str) -> str:
        """Reject missing, blank or non-string text fields."""
        if value is None:
            raise ValidationError(f"Missing required field: {field_name}")
        if not isinstance(value, str):
            raise ValidationError(f"Field must be a string: {field_name}")
        if not value.strip():
            raise ValidationError(f"Missing required field: {field_name}")
        return value

    def _check_text(self, text: Optional[str]) -> str:
        text = self._require(text, "text")
        max_length = self.config.max_text_length
        if max_length and len(text) > max_length:
            raise ValidationError(f"Text too long (max {max_length} chars)")
        return text

    def _check_board(self, board: Optional[str]) -> str:
        board = self._require(board, "board")
        if self._name_re is not None and not self._name_re.fullmatch(board):
            raise ValidationError(f"Invalid board name: {board!r}")
        return board

    # Threads

    def create_thread(self, board: str, text: str, secret: str) -> ThreadView:
        """
        Post a new thread to a board.

        Raises:
            ValidationError: board, text or secret missing or invalid
        """
        board = self._check_board(board)
        text = self._check_text(text)
        secret = self._require(secret, "delete_password")

        # Hash before taking the store lock
        password_hash = self.hasher.hash(secret)
        thread = self.store.insert_thread(board, text, password_hash)

        logger.info(f"Thread {thread.thread_id} created on /{board}/: {truncate(text, 40)!r}")
        with self.store.locked():
            return thread_to_view(thread)

    def list_recent_threads(self, board: str, limit: Optional[int] = None) -> list[ThreadView]:
        """
        List the most recently bumped threads on a board.

        Each thread carries at most reply_preview replies, newest first.
        """
        max_threads = self.config.max_threads
        if limit is None:
            limit = max_threads
        limit = max(0, min(limit, max_threads))

        with self.store.locked():
            threads = self.store.threads_on_board(board)[:limit]
            return [
                thread_to_view(t, reply_limit=self.config.reply_preview)
                for t in threads
            ]

    def get_thread(self, board: str, thread_id: int) -> ThreadView:
        """
        Get one thread with all of its replies.

        Raises:
            NotFoundError: no such thread on this board
        """
        with self.store.locked():
            thread = self.store.get_thread(board, thread_id)
            if thread is None:
                raise NotFoundError("Thread not found")
            return thread_to_view(thread)

    def report_thread(self, board: str, thread_id: int):
        """Flag a thread for moderation. No password is required."""
        if not self.store.mark_thread_reported(board, thread_id):
            raise NotFoundError("Thread not found")
        logger.info(f"Thread {thread_id} on /{board}/ reported")

    def delete_thread(self, board: str, thread_id: int, secret: str):
        """
        Delete a thread and all its replies.

        Raises:
            ValidationError: secret missing
            NotFoundError: no such thread on this board
            ForbiddenError: secret does not match
        """
        secret = self._require(secret, "delete_password")

        thread = self.store.get_thread(board, thread_id)
        if thread is None:
            raise NotFoundError("Thread not found")

        if not self.hasher.verify(secret, thread.delete_password):
            logger.warning(f"Rejected delete of thread {thread_id} on /{board}/: bad password")
            raise ForbiddenError("Incorrect delete password")

        # Deleted by someone else while we were verifying
        if not self.store.remove_thread(board, thread_id):
            raise NotFoundError("Thread not found")

        logger.info(f"Thread {thread_id} deleted from /{board}/")

    # Replies

    def create_reply(self, board: str, thread_id: int, text: str, secret: str) -> ReplyView:
        """
        Reply to a thread and bump it.

        Raises:
            NotFoundError: no such thread on this board
            ValidationError: text or secret missing or invalid
        """
        if self.store.get_thread(board, thread_id) is None:
            raise NotFoundError("Thread not found")

        text = self._check_text(text)
        secret = self._require(secret, "delete_password")

        password_hash = self.hasher.hash(secret)
        reply = self.store.insert_reply(board, thread_id, text, password_hash)
        if reply is None:
            raise NotFoundError("Thread not found")

        logger.info(f"Reply {reply.reply_id} added to thread {thread_id} on /{board}/")
        return reply_to_view(reply)

    def report_reply(self, board: str, thread_id: int, reply_id: int):
        """Flag a reply for moderation. No password is required."""
        if self.store.get_thread(board, thread_id) is None:
            raise NotFoundError("Thread not found")
        if not self.store.mark_reply_reported(board, thread_id, reply_id):
            raise NotFoundError("Reply not found")
        logger.info(f"Reply {reply_id} on thread {thread_id} reported")

    def delete_reply(self, board: str, thread_id: int, reply_id: int, secret: str):
        """
        Delete one reply, leaving the thread and its other replies intact.

        Raises:
            ValidationError: secret missing
            NotFoundError: no such thread, or no such reply in it
            ForbiddenError: secret does not match
        """
        secret = self._require(secret, "delete_password")

        if self.store.get_thread(board, thread_id) is None:
            raise NotFoundError("Thread not found")

        reply = self.store.get_reply(board, thread_id, reply_id)
        if reply is None:
            raise NotFoundError("Reply not found")

        if not self.hasher.verify(secret, reply.delete_password):
            logger.warning(f"Rejected delete of reply {reply_id} on thread {thread_id}: bad password")
            raise ForbiddenError("Incorrect delete password")

        if not self.store.remove_reply(board, thread_id, reply_id):
            raise NotFoundError("Reply not found")

        logger.info(f"Reply {reply_id} deleted from thread {thread_id}")

    def stats(self) -> dict:
        """Return store statistics."""
        stats = self.store.counts()
        stats["uptime"] = format_uptime(self.start_time)
        return stats
