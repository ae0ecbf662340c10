"""Tests for the in-memory resource pool."""

import pytest

from relief.resources import Handle, MemoryResourcePool


def test_register_and_get():
    pool = MemoryResourcePool("meshes")
    handle = pool.register("first")

    assert handle.pool == "meshes"
    assert pool.get(handle) == "first"
    assert handle in pool
    assert len(pool) == 1


def test_replace_keeps_handle():
    pool = MemoryResourcePool()
    handle = pool.register("first")

    assert pool.replace(handle, "second") == handle
    assert pool.get(handle) == "second"
    assert len(pool) == 1


def test_replace_unknown_handle_registers():
    pool = MemoryResourcePool("images")
    handle = pool.replace(Handle("other", 7), "buffer")

    assert handle.pool == "images"
    assert pool.get(handle) == "buffer"


def test_remove():
    pool = MemoryResourcePool()
    handle = pool.register("buffer")
    pool.remove(handle)

    assert handle not in pool
    with pytest.raises(KeyError):
        pool.get(handle)


def test_handles_are_unique():
    pool = MemoryResourcePool()
    handles = {pool.register(i) for i in range(5)}
    assert len(handles) == 5
