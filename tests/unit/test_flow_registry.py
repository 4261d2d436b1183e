"""
Unit tests for ResetFlowRegistry.
"""

import pytest

from src.api.flows import ResetFlowRegistry
from src.domain.accounts import AccountLifecycleController
from src.domain.ports import FlowState
from src.domain.verification import VerificationCodeIssuer


@pytest.fixture
def registry(directory, notifier, clock) -> ResetFlowRegistry:
    return ResetFlowRegistry(
        lambda: AccountLifecycleController(
            directory=directory,
            notifier=notifier,
            issuer=VerificationCodeIssuer(ttl_seconds=600, clock=clock),
        )
    )


class TestResetFlowRegistry:
    """Tests for opening, resolving and discarding flows."""

    def test_open_starts_at_email_step(self, registry: ResetFlowRegistry) -> None:
        flow_id, controller = registry.open()

        assert flow_id
        assert controller.state == FlowState.AWAITING_EMAIL
        assert registry.get(flow_id) is controller
        assert len(registry) == 1

    def test_flows_are_independent(self, registry: ResetFlowRegistry) -> None:
        first_id, first = registry.open()
        second_id, second = registry.open()

        assert first_id != second_id
        assert first is not second

    def test_unknown_flow(self, registry: ResetFlowRegistry) -> None:
        assert registry.get("missing") is None

    def test_discard_cancels_controller(self, registry: ResetFlowRegistry, directory) -> None:
        directory.register("Ana", "ana@x.com", "Abcd123$")
        flow_id, controller = registry.open()
        controller.begin_reset("ana@x.com")

        registry.discard(flow_id)

        assert registry.get(flow_id) is None
        assert controller.state == FlowState.IDLE
        assert controller.session is None

    def test_discard_is_idempotent(self, registry: ResetFlowRegistry) -> None:
        flow_id, _ = registry.open()
        registry.discard(flow_id)
        registry.discard(flow_id)
        registry.discard("never-existed")
        assert len(registry) == 0


class TestFlowEviction:
    """Expired and superseded flows leave the registry."""

    @pytest.fixture(autouse=True)
    def accounts(self, directory) -> None:
        directory.register("Ana", "ana@x.com", "Abcd123$")
        directory.register("Bob", "bob@x.com", "Abcd123$")

    def test_open_sweeps_expired_flows(self, registry: ResetFlowRegistry, clock) -> None:
        stale_id, stale = registry.open()
        stale.begin_reset("ana@x.com")
        clock.advance(601)

        fresh_id, _ = registry.open()

        assert registry.get(stale_id) is None
        assert stale.state == FlowState.IDLE
        assert registry.get(fresh_id) is not None
        assert len(registry) == 1

    def test_sweep_keeps_live_flows(self, registry: ResetFlowRegistry, clock) -> None:
        flow_id, controller = registry.open()
        controller.begin_reset("ana@x.com")
        clock.advance(599)

        assert registry.sweep() == 0
        assert registry.get(flow_id) is controller

    def test_sweep_keeps_flows_at_email_step(self, registry: ResetFlowRegistry, clock) -> None:
        flow_id, _ = registry.open()
        clock.advance(10**6)

        assert registry.sweep() == 0
        assert registry.get(flow_id) is not None

    def test_new_flow_supersedes_same_email(self, registry: ResetFlowRegistry) -> None:
        old_id, old = registry.open()
        old.begin_reset("ana@x.com")
        registry.supersede(old_id)
        new_id, new = registry.open()
        new.begin_reset("ANA@x.com")

        registry.supersede(new_id)

        assert registry.get(old_id) is None
        assert old.session is None
        assert registry.get(new_id) is new

    def test_supersede_keeps_other_emails(self, registry: ResetFlowRegistry) -> None:
        ana_id, ana = registry.open()
        ana.begin_reset("ana@x.com")
        bob_id, bob = registry.open()
        bob.begin_reset("bob@x.com")

        registry.supersede(bob_id)

        assert registry.get(ana_id) is ana
        assert len(registry) == 2

    def test_repeated_resets_stay_bounded(self, registry: ResetFlowRegistry) -> None:
        for _ in range(50):
            flow_id, controller = registry.open()
            controller.begin_reset("ana@x.com")
            registry.supersede(flow_id)

        assert len(registry) == 1
