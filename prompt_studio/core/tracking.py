"""
Request tokens for discarding stale asynchronous completions.

Every outstanding request is issued a token. When the request completes, its
result is applied only if the token is still the latest one issued for its
key and no invalidation happened in between.
"""

import itertools
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional


@dataclass(frozen=True)
class RequestToken:
    """Identifies one issued request."""

    key: Optional[Hashable]
    epoch: int
    serial: int


class RequestTracker:
    """Issues and validates request tokens, one latest token per key."""

    def __init__(self):
        self._serials = itertools.count(1)
        self._epoch = 0
        self._latest: Dict[Optional[Hashable], int] = {}

    def issue(self, key: Optional[Hashable] = None) -> RequestToken:
        """Issue a new token for `key`, superseding any earlier one."""
        serial = next(self._serials)
        self._latest[key] = serial
        return RequestToken(key=key, epoch=self._epoch, serial=serial)

    def is_current(self, token: RequestToken) -> bool:
        """True if no newer request for the same key and no invalidation happened."""
        return token.epoch == self._epoch and self._latest.get(token.key) == token.serial

    def is_pending(self, key: Optional[Hashable] = None) -> bool:
        """True if a request for `key` was issued and has not been released."""
        return key in self._latest

    def release(self, token: RequestToken) -> None:
        """Forget a completed request if it is still the latest for its key."""
        if self._latest.get(token.key) == token.serial:
            del self._latest[token.key]

    def invalidate_where(self, matches: Callable[[Optional[Hashable]], bool]) -> None:
        """Make the outstanding tokens whose key satisfies `matches` stale."""
        for key in [key for key in self._latest if matches(key)]:
            del self._latest[key]

    def invalidate(self) -> None:
        """Make every outstanding token stale."""
        self._epoch += 1
        self._latest.clear()
