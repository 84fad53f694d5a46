"""Tests for JoinGuard."""

import threading

from teams_meeting_bot.services import JoinGuard


class TestJoinGuard:
    """Tests for the threadId -> callId registry."""

    def test_check_empty(self) -> None:
        assert JoinGuard().check("T1") is None

    def test_register_and_check(self) -> None:
        guard = JoinGuard()
        guard.register("T1", "call-1")

        assert guard.check("T1") == "call-1"
        assert len(guard) == 1

    def test_one_entry_per_thread(self) -> None:
        guard = JoinGuard()
        guard.register("T1", "call-1")
        guard.register("T1", "call-2")

        assert guard.snapshot() == {"T1": "call-2"}

    def test_release_by_thread(self) -> None:
        guard = JoinGuard()
        guard.register("T1", "call-1")

        assert guard.release_by_thread("T1") == "call-1"
        assert guard.check("T1") is None
        assert guard.release_by_thread("T1") is None

    def test_release_by_call(self) -> None:
        guard = JoinGuard()
        guard.register("T1", "call-1")
        guard.register("T2", "call-2")

        assert guard.release_by_call("call-2") == "T2"
        assert guard.snapshot() == {"T1": "call-1"}

    def test_release_by_call_first_match_only(self) -> None:
        guard = JoinGuard()
        guard.register("T1", "call-1")
        guard.register("T2", "call-1")

        assert guard.release_by_call("call-1") == "T1"
        assert guard.snapshot() == {"T2": "call-1"}

    def test_release_by_call_unknown(self) -> None:
        guard = JoinGuard()
        guard.register("T1", "call-1")

        assert guard.release_by_call("call-9") is None
        assert len(guard) == 1

    def test_instances_are_isolated(self) -> None:
        a, b = JoinGuard(), JoinGuard()
        a.register("T1", "call-1")

        assert b.check("T1") is None

    def test_snapshot_is_a_copy(self) -> None:
        guard = JoinGuard()
        guard.register("T1", "call-1")
        guard.snapshot()["T2"] = "call-2"

        assert guard.check("T2") is None

    def test_concurrent_register_and_release(self) -> None:
        """Concurrent writers never corrupt the registry."""
        guard = JoinGuard()

        def worker(n: int) -> None:
            for i in range(200):
                guard.register(f"T{n}-{i}", f"call-{n}-{i}")
                guard.release_by_call(f"call-{n}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(guard) == 0
