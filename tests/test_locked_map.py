import threading

from chatplus.locked_map import LockedMap


def test_put_and_get():
    m = LockedMap()
    m.put("a", [1])
    assert m.get("a") == [1]


def test_missing_key_reads_none():
    assert LockedMap().get("missing") is None


def test_has_and_delete():
    m = LockedMap()
    m.put(1, "x")
    assert m.has(1)
    m.delete(1)
    assert not m.has(1)
    m.delete(1)
    assert m.to_list() == []


def test_put_overwrites():
    m = LockedMap()
    m.put("k", "old")
    m.put("k", "new")
    assert m.to_list() == ["new"]


def test_to_list_holds_all_values():
    m = LockedMap()
    for i in range(5):
        m.put(i, i * 10)
    assert sorted(m.to_list()) == [0, 10, 20, 30, 40]


def test_concurrent_puts():
    m = LockedMap()

    def worker(base):
        for i in range(200):
            m.put(base * 1000 + i, i)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(m.to_list()) == 8 * 200