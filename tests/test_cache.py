import pytest

from mdnsengine.cache import Cache
from mdnsengine.dns import RecordType
from mdnsengine.record import Record


class FakeTimer:
    def __init__(self, callback):
        self.callback = callback
        self.starts = []

    def start(self, msec=None):
        self.starts.append(msec)

    def stop(self):
        pass

    def is_active(self):
        return bool(self.starts)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def env():
    timers = []
    clock = FakeClock()

    def factory(callback):
        timer = FakeTimer(callback)
        timers.append(timer)
        return timer

    cache = Cache(timer_factory=factory, clock=clock)
    queried = []
    expired = []
    cache.should_query.connect(queried.append)
    cache.record_expired.connect(expired.append)
    return cache, timers[0], clock, queried, expired


def srv(name=b"svc._http._tcp.local.", target=b"host.local.", ttl=10, flush=False):
    return Record(
        name=name, type=RecordType.SRV, target=target, port=80, ttl=ttl, flush_cache=flush
    )


def test_empty_lookup(env):
    cache, *_ = env
    assert cache.lookup_records(None, RecordType.ANY) == []
    assert cache.lookup_record(b"x.local.", RecordType.A) is None


def test_add_and_lookup_by_name_and_type(env):
    cache, *_ = env
    record = srv()
    txt = Record(name=b"svc._http._tcp.local.", type=RecordType.TXT, ttl=10)
    cache.add_record(record)
    cache.add_record(txt)
    assert cache.lookup_record(b"svc._http._tcp.local.", RecordType.SRV) == record
    assert cache.lookup_records(b"svc._http._tcp.local.", RecordType.ANY) == [record, txt]
    assert cache.lookup_records(None, RecordType.TXT) == [txt]
    assert cache.lookup_records(b"other.local.", RecordType.ANY) == []


def test_identical_record_replaced(env):
    cache, *_ = env
    cache.add_record(srv(ttl=10))
    cache.add_record(srv(ttl=20))
    records = cache.lookup_records(None, RecordType.ANY)
    assert len(records) == 1
    assert records[0].ttl == 20


def test_different_records_coexist_without_flush(env):
    cache, *_ = env
    cache.add_record(srv(target=b"a.local."))
    cache.add_record(srv(target=b"b.local."))
    targets = [r.target for r in cache.lookup_records(None, RecordType.SRV)]
    assert targets == [b"a.local.", b"b.local."]


def test_flush_cache_replaces_same_name_and_type(env):
    cache, *_ = env
    cache.add_record(srv(target=b"a.local."))
    cache.add_record(srv(target=b"b.local."))
    cache.add_record(srv(target=b"c.local.", flush=True))
    records = cache.lookup_records(None, RecordType.SRV)
    assert [r.target for r in records] == [b"c.local."]


def test_zero_ttl_removes_and_reports_expired(env):
    cache, _, _, queried, expired = env
    original = srv(ttl=10)
    cache.add_record(original)
    cache.add_record(srv(ttl=0))
    assert expired == [original]
    assert cache.lookup_records(None, RecordType.ANY) == []
    assert queried == []


def test_timer_started_at_half_ttl(env):
    cache, timer, *_ = env
    cache.add_record(srv(ttl=10))
    assert len(timer.starts) == 1
    assert 5000 <= timer.starts[0] < 5020


def test_later_record_does_not_restart_timer(env):
    cache, timer, *_ = env
    cache.add_record(srv(ttl=10))
    cache.add_record(srv(name=b"other._http._tcp.local.", ttl=100))
    assert len(timer.starts) == 1
    cache.add_record(srv(name=b"short._http._tcp.local.", ttl=2))
    assert len(timer.starts) == 2
    assert timer.starts[1] < timer.starts[0]


def test_timeout_emits_should_query(env):
    cache, timer, clock, queried, expired = env
    record = srv(ttl=10)
    cache.add_record(record)
    clock.now = 5.1
    cache.on_timeout()
    assert queried == [record]
    assert expired == []
    assert cache.lookup_records(None, RecordType.ANY) == [record]
    assert 3400 <= timer.starts[-1] < 3420


def test_several_passed_triggers_emit_one_query(env):
    cache, _, clock, queried, expired = env
    record = srv(ttl=10)
    cache.add_record(record)
    clock.now = 9.2
    cache.on_timeout()
    assert queried == [record]
    assert expired == []


def test_timeout_expires_record(env):
    cache, timer, clock, queried, expired = env
    record = srv(ttl=10)
    cache.add_record(record)
    starts_before = len(timer.starts)
    clock.now = 10.0
    cache.on_timeout()
    assert expired == [record]
    assert queried == []
    assert cache.lookup_records(None, RecordType.ANY) == []
    assert len(timer.starts) == starts_before


def test_timeout_before_any_trigger_does_nothing(env):
    cache, _, clock, queried, expired = env
    record = srv(ttl=10)
    cache.add_record(record)
    clock.now = 1.0
    cache.on_timeout()
    assert queried == []
    assert expired == []
    assert cache.lookup_record(None, RecordType.SRV) == record


def test_expired_slot_can_read_cache(env):
    cache, _, clock, _, _ = env
    seen = []
    cache.record_expired.connect(
        lambda rec: seen.append(cache.lookup_records(None, RecordType.ANY))
    )
    cache.add_record(srv(ttl=1))
    clock.now = 2.0
    cache.on_timeout()
    assert seen == [[]]