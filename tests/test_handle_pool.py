import pytest

from xcl.handle_pool import HandleEntry, HandlePool

SPAN = 4


def test_alloc_fills_span_then_starts_new_one():
    pool = HandlePool(span_size=SPAN)
    entries = [pool.alloc() for _ in range(SPAN)]
    assert len({id(e) for e in entries}) == SPAN
    assert not pool.available_spans()
    extra = pool.alloc()
    assert all(extra is not e for e in entries)
    assert pool.available_spans() == 1


def test_recycle_moves_span_back_and_into_reuse():
    pool = HandlePool(span_size=SPAN)
    entries = [pool.alloc() for _ in range(SPAN)]
    pool.recycle(entries[0])
    assert pool.available_spans()
    for entry in entries[1:]:
        pool.recycle(entry)
    assert not pool.available_spans()
    assert pool.recycled_spans()
    reused = pool.alloc()
    assert not pool.recycled_spans()
    assert any(reused is e for e in entries)


def test_max_recycled_limits_kept_spans():
    max_recycled = 1
    pool = HandlePool(span_size=2, max_recycled=max_recycled)
    entries = [pool.alloc() for _ in range(4)]
    for entry in entries:
        pool.recycle(entry)
    assert pool.recycled_spans() == max_recycled


def test_recycle_none_is_ignored():
    pool = HandlePool(span_size=SPAN)
    pool.alloc()
    before = (pool.available_spans(), pool.recycled_spans())
    pool.recycle(None)
    assert (pool.available_spans(), pool.recycled_spans()) == before


def test_double_recycle_raises():
    pool = HandlePool(span_size=SPAN)
    entry = pool.alloc()
    pool.recycle(entry)
    with pytest.raises(ValueError):
        pool.recycle(entry)


def test_foreign_entry_raises():
    pool = HandlePool(span_size=SPAN)
    other = HandlePool(span_size=SPAN)
    with pytest.raises(ValueError):
        pool.recycle(other.alloc())
    with pytest.raises(ValueError):
        pool.recycle(HandleEntry())


def test_invalid_span_size():
    with pytest.raises(ValueError):
        HandlePool(span_size=0)


def test_entry_close_counts_references():
    pool = HandlePool(span_size=SPAN)
    entry = pool.alloc()
    destroyed = []
    entry.reset("obj", destroyed.append)
    entry.refs += 1
    assert entry.close() is False
    assert destroyed == []
    assert entry.close() is True
    assert destroyed == ["obj"]
    assert entry.obj is None


def test_delete_object_without_destructor():
    entry = HandleEntry()
    entry.reset("obj")
    entry.name = "name"
    entry.delete_object()
    assert entry.obj is None
    assert entry.name is None