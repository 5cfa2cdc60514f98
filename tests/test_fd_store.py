from unitvisor.fd_store import FDStore


class FakeSocket:
    def __init__(self, fd):
        self._fd = fd

    def fileno(self):
        return self._fd


def test_insert_and_get_global():
    store = FDStore()
    entry = [("a.socket", "a.socket", FakeSocket(10))]
    assert store.insert_global("a.socket", entry) is None
    assert store.get_global("a.socket") is entry


def test_insert_global_twice_returns_new():
    store = FDStore()
    first = [("a.socket", "a.socket", FakeSocket(10))]
    second = [("a.socket", "a.socket", FakeSocket(11))]
    store.insert_global("a.socket", first)
    assert store.insert_global("a.socket", second) is second
    assert store.get_global("a.socket") is first


def test_remove_global():
    store = FDStore()
    entry = [("a.socket", "a.socket", 4)]
    store.insert_global("a.socket", entry)
    assert store.remove_global("a.socket") is entry
    assert store.get_global("a.socket") is None
    assert store.remove_global("a.socket") is None


def test_global_fds_to_ids():
    store = FDStore()
    store.insert_global("a.socket", [("id-a", "a", FakeSocket(3)), ("id-a", "a2", 4)])
    store.insert_global("b.socket", [("id-b", "b", FakeSocket(5))])
    assert store.global_fds_to_ids() == [(3, "id-a"), (4, "id-a"), (5, "id-b")]


def test_service_stored_extends():
    store = FDStore()
    store.insert_service_stored("s.service", "web", [7])
    store.insert_service_stored("s.service", "web", [8, 9])
    assert store.get_service_stored("s.service", "web") == [7, 8, 9]


def test_service_stored_missing():
    store = FDStore()
    assert store.get_service_stored("s.service", "web") is None
    assert store.remove_service_stored("s.service", "web") is None


def test_remove_service_stored():
    store = FDStore()
    store.insert_service_stored("s.service", "web", [7])
    store.insert_service_stored("s.service", "db", [8])
    assert store.remove_service_stored("s.service", "web") == [7]
    assert store.get_service_stored("s.service", "web") is None
    assert store.get_service_stored("s.service", "db") == [8]