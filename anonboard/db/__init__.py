"""AnonBoard Storage Module - in-memory thread store and data models."""

from .store import ThreadStore
from .models import Thread, Reply, ThreadView, ReplyView

__all__ = ["ThreadStore", "Thread", "Reply", "ThreadView", "ReplyView"]
