"""End-to-end tests: hosted components writing to a trace session's log."""

from lifetrace import ManualScheduler, TraceSession, format_log_lines
from tests.components import X
from tests.host import Host

MODERN_LOG = [
    # Mount
    "constructor",
    "static getDerivedStateFromProps",
    "custom:getDerivedStateFromProps",
    "render",
    "custom:render",
    "componentDidMount",
    "custom:componentDidMount",
    # State update
    "setState",
    "setState:update fn",
    "custom:setState update fn",
    "shouldComponentUpdate",
    "custom:shouldComponentUpdate",
    "render",
    "custom:render",
    "getSnapshotBeforeUpdate",
    "custom:getSnapshotBeforeUpdate",
    "componentDidUpdate",
    "custom:componentDidUpdate",
    "setState:callback",
    "custom:setState callback",
    # Unmount
    "componentWillUnmount",
    "custom:componentWillUnmount",
]

LEGACY_LOG = [
    # Mount
    "constructor",
    "componentWillMount",
    "custom:componentWillMount",
    "render",
    "custom:render",
    "componentDidMount",
    "custom:componentDidMount",
    # Props update
    "componentWillReceiveProps",
    "custom:componentWillReceiveProps",
    "shouldComponentUpdate",
    "custom:shouldComponentUpdate",
    "componentWillUpdate",
    "custom:componentWillUpdate",
    "render",
    "custom:render",
    "componentDidUpdate",
    "custom:componentDidUpdate",
    # State update
    "setState",
    "setState:update fn",
    "custom:setState update fn",
    "shouldComponentUpdate",
    "custom:shouldComponentUpdate",
    "componentWillUpdate",
    "custom:componentWillUpdate",
    "render",
    "custom:render",
    "componentDidUpdate",
    "custom:componentDidUpdate",
    "setState:callback",
    "custom:setState callback",
    # Unmount
    "componentWillUnmount",
    "custom:componentWillUnmount",
]


def expected_lines(label: str, messages: list[str]) -> list[str]:
    return [f"{i:>2} {label}: {message}" for i, message in enumerate(messages)]


class TestModernLifecycle:
    """Logging a component that implements the modern hook set."""

    def test_render_only_component_logs_mount(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host
    ) -> None:
        """Test a component with only render logs constructor, render, componentDidMount."""
        traced = session.wrap(X)
        host.mount(traced)
        scheduler.run_all()

        entries = session.log.snapshot()
        assert [e.message for e in entries] == ["constructor", "render", "componentDidMount"]
        assert all(e.instance_label == "X-1" for e in entries)

    def test_logs_all_modern_hooks(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host, traced_child: type
    ) -> None:
        """Test mount, state update and unmount log 22 entries in call order."""
        child = host.mount(traced_child)
        child.update_state()
        host.unmount(child)
        scheduler.run_all()

        entries = session.log.snapshot()
        assert format_log_lines(entries) == expected_lines("Child-1", MODERN_LOG)
        assert [e.sequence for e in entries] == list(range(1, 23))

    def test_state_update_applies(self, scheduler: ManualScheduler, host: Host, traced_child: type) -> None:
        """Test the wrapped resolver's return value reaches the host."""
        child = host.mount(traced_child)
        child.update_state()
        child.update_state()

        assert child.state == {"counter": 2}
        assert host.rendered[id(child)] == "<Child counter=2/>"

    def test_custom_traces_flagged(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host, traced_child: type
    ) -> None:
        """Test custom traces are flagged and attributed to the running hook."""
        host.mount(traced_child)
        scheduler.run_all()

        custom = [e for e in session.log.snapshot() if e.is_custom_trace]
        assert [(e.message, e.hook_name) for e in custom] == [
            ("custom:getDerivedStateFromProps", "getDerivedStateFromProps"),
            ("custom:render", "render"),
            ("custom:componentDidMount", "componentDidMount"),
        ]


class TestLegacyLifecycle:
    """Logging a component that implements the legacy hook set."""

    def test_logs_all_legacy_hooks(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host, traced_legacy_child: type
    ) -> None:
        """Test mount, props update, state update and unmount log 32 entries."""
        child = host.mount(traced_legacy_child, {"prop": 0})
        host.update_props(child, {"prop": 42})
        child.update_state()
        host.unmount(child)
        scheduler.run_all()

        assert format_log_lines(session.log.snapshot()) == expected_lines("LegacyChild-1", LEGACY_LOG)

    def test_props_reach_instance(self, host: Host, traced_legacy_child: type) -> None:
        """Test props updates pass through the wrapped hooks unchanged."""
        child = host.mount(traced_legacy_child, {"prop": 0})
        host.update_props(child, {"prop": 42})

        assert child.props == {"prop": 42}


class TestFlushBatching:
    """Entries only become visible when the scheduler ticks."""

    def test_mount_is_one_flush(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host, traced_child: type
    ) -> None:
        """Test a whole mount burst coalesces into a single flush."""
        host.mount(traced_child)

        assert session.log.snapshot() == ()
        assert len(session.log.pending()) == 7
        assert scheduler.pending_count == 1

        scheduler.run_pending()

        assert len(session.log.snapshot()) == 7
        assert session.log.stats.flushes == 1

    def test_order_preserved_across_flushes(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host, traced_child: type
    ) -> None:
        """Test sequence order matches call order even with a flush in between."""
        child = host.mount(traced_child)
        scheduler.run_pending()
        child.update_state()
        scheduler.run_pending()
        host.unmount(child)
        scheduler.run_pending()

        entries = session.log.snapshot()
        assert [e.message for e in entries] == MODERN_LOG
        sequences = [e.sequence for e in entries]
        assert sequences == sorted(sequences)
        assert len(set(sequences)) == len(sequences)


class TestInstanceLabels:
    """Instance label counters across mounts, clears and resets."""

    def test_starts_at_one(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host, traced_child: type
    ) -> None:
        """Test the first instance of a class is labeled -1."""
        host.mount(traced_child)
        scheduler.run_all()

        assert format_log_lines(session.log.snapshot())[0] == " 0 Child-1: constructor"

    def test_increments_on_remount(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host, traced_child: type
    ) -> None:
        """Test clearing the log does not reset labels."""
        host.unmount(host.mount(traced_child))
        scheduler.run_all()
        session.clear_log()

        host.mount(traced_child)
        scheduler.run_all()

        assert session.log.snapshot()[0].instance_label == "Child-2"

    def test_clear_then_reset_identity(
        self, session: TraceSession, scheduler: ManualScheduler, host: Host
    ) -> None:
        """Test mount, unmount, clear, reset identity, mount again gives X-1 on an empty log."""
        traced = session.wrap(X)
        host.unmount(host.mount(traced))
        scheduler.run_all()

        session.clear_log()
        session.reset_identity()
        assert session.log.snapshot() == ()

        host.mount(traced)
        scheduler.run_all()

        entries = session.log.snapshot()
        assert entries[0].instance_label == "X-1"
        assert entries[0].sequence == 1
        assert len(entries) == 3

    def test_labels_are_per_class(self, session: TraceSession, host: Host, traced_child: type) -> None:
        """Test each class keeps its own counter."""
        traced_x = session.wrap(X)

        first_child = host.mount(traced_child)
        first_x = host.mount(traced_x)
        second_child = host.mount(traced_child)

        assert first_child.trace("probe").instance_label == "Child-1"
        assert first_x.trace("probe").instance_label == "X-1"
        assert second_child.trace("probe").instance_label == "Child-2"


class TestSessionIsolation:
    """Independent sessions do not share labels or entries."""

    def test_two_sessions(self, host: Host) -> None:
        """Test the same class wrapped in two sessions logs separately."""
        first = TraceSession(scheduler=ManualScheduler())
        second = TraceSession(scheduler=ManualScheduler())

        host.mount(first.wrap(X))
        host.mount(second.wrap(X))
        first.log.flush()
        second.log.flush()

        assert [e.instance_label for e in first.log.snapshot()] == ["X-1"] * 3
        assert [e.instance_label for e in second.log.snapshot()] == ["X-1"] * 3
