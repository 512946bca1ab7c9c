"""
Concurrent check-ins for the same user and day: exactly one may win.
"""
import threading

from mindcare.core.errors import DuplicateCheckInError
from mindcare.models.mood_event import EventKind

WORKERS = 8


def _race(diary, user_id, moods):
    barrier = threading.Barrier(len(moods))
    outcomes = []
    lock = threading.Lock()

    def worker(mood_key):
        barrier.wait()
        try:
            entry_id = diary.record_mood_check_in(user_id, mood_key)
            result = ("ok", entry_id)
        except DuplicateCheckInError:
            result = ("duplicate", None)
        except Exception as e:  # surfaced in the assertion below
            result = ("error", repr(e))
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker, args=(m,)) for m in moods]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    return outcomes


def test_simultaneous_check_ins_store_exactly_one(diary, store, clock, user_id):
    """Test that N racing check-ins yield one success and N-1 conflicts."""
    outcomes = _race(diary, user_id, [f"mood{i}" for i in range(WORKERS)])

    kinds = sorted(kind for kind, _ in outcomes)
    assert kinds == ["duplicate"] * (WORKERS - 1) + ["ok"], outcomes

    check_ins = [e for e in store.list_by_user(user_id) if e.kind == EventKind.CHECK_IN]
    assert len(check_ins) == 1
    assert store.exists_for_day(user_id, clock.now.date(), kind=EventKind.CHECK_IN)


def test_racing_pre_check_is_still_caught_by_constraint(diary, store, monkeypatch, user_id):
    """Test the race where every request passes the pre-check before any insert."""
    monkeypatch.setattr(store, "exists_for_day", lambda *args, **kwargs: False)

    outcomes = _race(diary, user_id, ["happy"] * WORKERS)

    assert sum(1 for kind, _ in outcomes if kind == "ok") == 1
    assert sum(1 for kind, _ in outcomes if kind == "duplicate") == WORKERS - 1
    assert len(store.list_by_user(user_id)) == 1
