import threading

import pytest

from aadusers.locks import MutexKV, lock_by_name, unlock_by_name


def test_lock_and_unlock_track_state():
    kv = MutexKV()
    assert kv.locked("a") is False
    kv.lock("a")
    assert kv.locked("a") is True
    kv.unlock("a")
    assert kv.locked("a") is False


def test_keys_are_independent():
    kv = MutexKV()
    kv.lock("a")
    assert kv.locked("b") is False
    kv.lock("b")
    assert kv.locked("a") and kv.locked("b")
    kv.unlock("a")
    kv.unlock("b")
    assert not kv.locked("a")


def test_unlock_of_unlocked_key_raises():
    kv = MutexKV()
    with pytest.raises(RuntimeError):
        kv.unlock("never-locked")


def test_lock_blocks_other_thread_until_unlocked():
    kv = MutexKV()
    kv.lock("k")
    acquired = threading.Event()

    def worker():
        kv.lock("k")
        acquired.set()
        kv.unlock("k")

    thread = threading.Thread(target=worker)
    thread.start()
    assert acquired.wait(0.1) is False
    kv.unlock("k")
    assert acquired.wait(5) is True
    thread.join(5)
    assert kv.locked("k") is False


def test_lock_by_name_serialises_same_name():
    lock_by_name("azuread_user", "alice")
    acquired = threading.Event()

    def worker():
        lock_by_name("azuread_user", "alice")
        acquired.set()
        unlock_by_name("azuread_user", "alice")

    thread = threading.Thread(target=worker)
    thread.start()
    assert acquired.wait(0.1) is False
    unlock_by_name("azuread_user", "alice")
    assert acquired.wait(5) is True
    thread.join(5)
    assert thread.is_alive() is False
    # The worker released the lock, so a further unlock must fail.
    with pytest.raises(RuntimeError):
        unlock_by_name("azuread_user", "alice")


def test_lock_by_name_distinguishes_resource_types():
    lock_by_name("azuread_user", "bob")
    acquired = threading.Event()

    def worker():
        lock_by_name("azuread_group", "bob")
        acquired.set()
        unlock_by_name("azuread_group", "bob")

    thread = threading.Thread(target=worker)
    thread.start()
    try:
        assert acquired.wait(5) is True
    finally:
        unlock_by_name("azuread_user", "bob")
        thread.join(5)
    # Both keys are released again: unlocking either a second time fails.
    with pytest.raises(RuntimeError):
        unlock_by_name("azuread_group", "bob")
    with pytest.raises(RuntimeError):
        unlock_by_name("azuread_user", "bob")