"""
AnonBoard Thread Store

In-memory registry of threads and replies. State lives only in process
memory and is lost on restart.

One re-entrant lock guards every read and write, so identifier
assignment never collides and readers never see a half-built record.
Password hashing is done by the caller, outside the lock.
"""

import logging
import threading
from typing import Callable, Iterator, Optional
from contextlib import contextmanager

from .models import Thread, Reply
from ..utils.formatting import now_us

logger = logging.getLogger(__name__)


class ThreadStore:
    """
    Thread/reply registry for one process.

    Identifiers come from two counters (threads, replies) that only move
    forward; deleting a record never frees its identifier. Reply ids are
    global across all threads and boards.
    """

    def __init__(self, clock: Callable[[], int] = now_us):
        """
        Initialize an empty store.

        Args:
            clock: Source of microsecond timestamps (injectable for tests)
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._threads: dict[int, Thread] = {}  # insertion ordered
        self._next_thread_id = 1
        self._next_reply_id = 1
        self._last_us = 0

    @contextmanager
    def locked(self) -> Iterator["ThreadStore"]:
        """Hold the store lock for a multi-step read or write."""
        with self._lock:
            yield self

    def _tick(self) -> int:
        """Return a timestamp strictly greater than any issued before."""
        now = max(self._clock(), self._last_us + 1)
        self._last_us = now
        return now

    # Threads

    def insert_thread(self, board: str, text: str, password_hash: str) -> Thread:
        """Create and store a new thread."""
        with self._lock:
            now = self._tick()
            thread = Thread(
                thread_id=self._next_thread_id,
                board=board,
                text=text,
                delete_password=password_hash,
                created_at_us=now,
                bumped_at_us=now,
            )
            self._next_thread_id += 1
            self._threads[thread.thread_id] = thread

        logger.debug(f"Stored thread {thread.thread_id} on /{board}/")
        return thread

    def get_thread(self, board: str, thread_id: int) -> Optional[Thread]:
        """Get a thread by id, only if it belongs to the given board."""
        with self._lock:
            thread = self._threads.get(thread_id)
            if thread is None or thread.board != board:
                return None
            return thread

    def threads_on_board(self, board: str) -> list[Thread]:
        """Threads on a board, most recently bumped first."""
        with self._lock:
            matching = [t for t in self._threads.values() if t.board == board]
            # Stable sort: equal bump times keep insertion order
            return sorted(matching, key=lambda t: t.bumped_at_us, reverse=True)

    def remove_thread(self, board: str, thread_id: int) -> bool:
        """Remove a thread and all its replies."""
        with self._lock:
            thread = self.get_thread(board, thread_id)
            if thread is None:
                return False
            del self._threads[thread_id]
            return True

    def mark_thread_reported(self, board: str, thread_id: int) -> bool:
        """Flag a thread as reported."""
        with self._lock:
            thread = self.get_thread(board, thread_id)
            if thread is None:
                return False
            thread.reported = True
            return True

    # Replies

    def insert_reply(
        self,
        board: str,
        thread_id: int,
        text: str,
        password_hash: str
    ) -> Optional[Reply]:
        """
        Append a reply to a thread and bump it.

        Returns None if the thread does not exist on the board.
        """
        with self._lock:
            thread = self.get_thread(board, thread_id)
            if thread is None:
                return None

            now = self._tick()
            reply = Reply(
                reply_id=self._next_reply_id,
                thread_id=thread_id,
                text=text,
                delete_password=password_hash,
                created_at_us=now,
            )
            self._next_reply_id += 1
            thread.replies.append(reply)
            thread.bumped_at_us = max(thread.bumped_at_us, now)

        logger.debug(f"Stored reply {reply.reply_id} on thread {thread_id}")
        return reply

    def get_reply(self, board: str, thread_id: int, reply_id: int) -> Optional[Reply]:
        """Get a reply within a thread."""
        with self._lock:
            thread = self.get_thread(board, thread_id)
            if thread is None:
                return None
            return thread.find_reply(reply_id)

    def remove_reply(self, board: str, thread_id: int, reply_id: int) -> bool:
        """Remove one reply from its thread."""
        with self._lock:
            thread = self.get_thread(board, thread_id)
            if thread is None:
                return False
            reply = thread.find_reply(reply_id)
            if reply is None:
                return False
            thread.replies.remove(reply)
            return True

    def mark_reply_reported(self, board: str, thread_id: int, reply_id: int) -> bool:
        """Flag a reply as reported."""
        with self._lock:
            reply = self.get_reply(board, thread_id, reply_id)
            if reply is None:
                return False
            reply.reported = True
            return True

    # Statistics

    def counts(self) -> dict:
        """Return record counts and the last identifiers issued."""
        with self._lock:
            return {
                "threads": len(self._threads),
                "replies": sum(len(t.replies) for t in self._threads.values()),
                "boards": len({t.board for t in self._threads.values()}),
                "last_thread_id": self._next_thread_id - 1,
                "last_reply_id": self._next_reply_id - 1,
            }
