"""Capture-permission token tracking."""

from __future__ import annotations

from typing import Any

from scriptrunner.core import messages
from scriptrunner.core.interfaces import CaptureResource, Notifier
from scriptrunner.logging import get_logger


class TokenStore:
    """Single-slot holder for the capture-permission token.

    The gate is the only writer. A token can be set once; it must be cleared
    before another one is accepted.
    """

    def __init__(self, token: Any = None) -> None:
        self._token = token

    @property
    def present(self) -> bool:
        return self._token is not None

    def get(self) -> Any:
        return self._token

    def set(self, token: Any) -> bool:
        if token is None or self._token is not None:
            return False
        self._token = token
        return True

    def clear(self) -> None:
        self._token = None


class PermissionTokenGate:
    """Holds back capture preparation until a permission token is available."""

    def __init__(
        self, capture: CaptureResource, notifier: Notifier, store: TokenStore | None = None
    ) -> None:
        self.capture = capture
        self.notifier = notifier
        self.store = store if store is not None else TokenStore()
        self.logger = get_logger("token-gate")
        self.token_request_pending = False
        self.prepared = False

    @property
    def token_present(self) -> bool:
        return self.store.present

    def on_init(self, wants_token: bool, has_token: bool) -> bool:
        """Returns False when the caller must wait for a token before going further."""
        if wants_token and not has_token:
            self.token_request_pending = True
            self.logger.info("Waiting for capture permission token")
            return False
        self.token_request_pending = False
        self._prepare()
        return True

    def on_token_received(self, token: Any) -> bool:
        """Returns True if this call prepared the capture resource."""
        if token is None:
            self.logger.warning("Ignoring empty capture permission token")
            return False
        if not self.store.set(token):
            self.logger.debug("Token slot already filled; keeping existing token")
        self.token_request_pending = False
        if self.prepared:
            return False
        return self._prepare()

    def release(self) -> None:
        try:
            if self.prepared:
                self.prepared = False
                self.logger.debug("Releasing capture resource")
                self.capture.release()
        finally:
            self.store.clear()

    def _prepare(self) -> bool:
        if self.prepared:
            return False
        try:
            self.capture.prepare()
        except Exception as exc:
            self.logger.exception("Capture preparation failed: {}", exc)
            self.notifier.notify(messages.CAPTURE_UNAVAILABLE)
            return False
        self.prepared = True
        self.logger.info("Capture resource prepared")
        return True
