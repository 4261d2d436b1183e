"""
Password reset flow registry.

Each reset attempt started over HTTP gets its own
AccountLifecycleController, addressed by a random flow id. The
registry is the HTTP counterpart of one open forgot-password dialog
per browser tab.

Flows whose code has expired are swept whenever a new flow is opened,
and a new flow for an email supersedes older flows for it. Open flows
are therefore bounded by the number of registered emails.
"""

import logging
import secrets
import threading
from collections.abc import Callable

from src.domain.accounts import AccountLifecycleController

logger = logging.getLogger(__name__)


class ResetFlowRegistry:
    """Thread-safe map of flow id -> controller."""

    def __init__(self, controller_factory: Callable[[], AccountLifecycleController]) -> None:
        self._factory = controller_factory
        self._flows: dict[str, AccountLifecycleController] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._flows)

    def open(self) -> tuple[str, AccountLifecycleController]:
        """Create a controller with its reset dialog open at the email step."""
        self.sweep()
        controller = self._factory()
        controller.open_reset()
        flow_id = secrets.token_urlsafe(16)
        with self._lock:
            self._flows[flow_id] = controller
        return flow_id, controller

    def get(self, flow_id: str) -> AccountLifecycleController | None:
        with self._lock:
            return self._flows.get(flow_id)

    def discard(self, flow_id: str) -> None:
        """Cancel and forget a flow. Unknown ids are ignored."""
        with self._lock:
            controller = self._flows.pop(flow_id, None)
        if controller is not None:
            controller.cancel()
            logger.info("Reset flow %s discarded", flow_id)

    def supersede(self, flow_id: str) -> None:
        """
        Discard other flows resetting the same email as this one.

        Only the newest flow per email stays open, like a fresh code
        replacing the previous one.
        """
        with self._lock:
            current = self._flows.get(flow_id)
            if current is None or current.session is None:
                return
            target = current.session.target_email
            stale = [
                other_id
                for other_id, controller in self._flows.items()
                if other_id != flow_id
                and controller.session is not None
                and controller.session.target_email == target
            ]
            superseded = [self._flows.pop(other_id) for other_id in stale]
        for controller in superseded:
            controller.cancel()
        if superseded:
            logger.info("Superseded %d reset flow(s) for %s", len(superseded), target)

    def sweep(self) -> int:
        """
        Discard every flow whose verification code has expired.

        Flows still at the email step have no code yet and are kept.

        Returns:
            Number of flows discarded
        """
        with self._lock:
            expired = [
                flow_id
                for flow_id, controller in self._flows.items()
                if controller.session is not None
                and controller.issuer.is_expired(controller.session)
            ]
            swept = [self._flows.pop(flow_id) for flow_id in expired]
        for controller in swept:
            controller.cancel()
        if swept:
            logger.info("Swept %d expired reset flow(s)", len(swept))
        return len(swept)
