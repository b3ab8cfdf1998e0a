"""Tests for src/engine/sessions.py — connection/session association."""

import pytest

from src.engine.base import Roll


class TestConnections:
    def test_connect_counts_unregistered(self, registry):
        registry.connect("c1")
        registry.connect("c2")
        assert registry.connected_count == 2

    def test_connect_is_idempotent(self, registry):
        registry.connect("c1")
        registry.connect("c1")
        assert registry.connected_count == 1

    def test_disconnect_decrements(self, registry):
        registry.connect("c1")
        registry.disconnect("c1")
        assert registry.connected_count == 0

    def test_disconnect_unknown_is_noop(self, registry):
        registry.disconnect("nobody")
        assert registry.connected_count == 0


class TestRegister:
    def test_register_returns_has_rolled(self, registry):
        registry.connect("c1")
        assert registry.register("s1", "c1") is False

    def test_register_reports_existing_roll(self, state, registry):
        state.active = True
        state.append(Roll.record("s1", 4))
        assert registry.register("s1", "c1") is True

    def test_register_associates_both_ways(self, registry):
        registry.register("s1", "c1")
        assert registry.session_for("c1") == "s1"
        assert registry.connection_for("s1") == "c1"
        assert registry.is_registered("s1")

    def test_register_is_idempotent(self, registry):
        registry.register("s1", "c1")
        registry.register("s1", "c1")
        assert registry.registered_connections() == [("c1", "s1")]

    def test_register_replaces_connection_session(self, registry):
        registry.register("s1", "c1")
        registry.register("s2", "c1")
        assert registry.session_for("c1") == "s2"
        assert registry.connection_for("s1") is None
        assert registry.connection_for("s2") == "c1"

    def test_last_register_wins_for_session(self, registry):
        registry.register("s1", "old")
        registry.register("s1", "new")
        assert registry.connection_for("s1") == "new"

    def test_register_rejects_empty_session(self, registry):
        with pytest.raises(ValueError):
            registry.register("", "c1")
        assert registry.session_for("c1") is None

    def test_unknown_session_not_registered(self, registry):
        assert not registry.is_registered("ghost")
        assert not registry.is_registered(None)


class TestUnregister:
    def test_unregister_drops_association(self, registry):
        registry.register("s1", "c1")
        registry.unregister("c1")
        assert registry.session_for("c1") is None
        assert registry.connection_for("s1") is None

    def test_unregister_keeps_has_rolled(self, state, registry):
        registry.register("s1", "c1")
        state.active = True
        state.append(Roll.record("s1", 6))
        registry.disconnect("c1")
        assert registry.has_rolled("s1") is True
        assert registry.is_registered("s1")

    def test_disconnect_without_rolling_keeps_session_known(self, registry):
        registry.register("s1", "c1")
        registry.disconnect("c1")
        assert registry.is_registered("s1")
        assert registry.has_rolled("s1") is False
        assert registry.connected_count == 0

    def test_disconnect_of_stale_connection_keeps_newer_link(self, registry):
        registry.register("s1", "old")
        registry.register("s1", "new")
        registry.disconnect("old")
        assert registry.connection_for("s1") == "new"
