"""
Shared fixtures.

ThreadComm stands in for an mpi4py communicator: each "rank" is a thread and
the lower-case collectives (bcast, scatter, reduce, gather, barrier) are
built on one threading.Barrier, so the distributed engine runs unchanged
with several ranks inside one test process.
"""

import builtins
import errno
import functools
import operator
import threading

import pytest

from primelist.context import MPIContext


class _Group:
    def __init__(self, size):
        self.size = size
        self.barrier = threading.Barrier(size, timeout=30)
        self.slots = [None] * size


class ThreadComm:
    def __init__(self, group, rank):
        self._group = group
        self._rank = rank

    def Get_rank(self):
        return self._rank

    def Get_size(self):
        return self._group.size

    def _exchange(self, obj):
        # Everybody posts, everybody reads, nobody overwrites before all have read
        self._group.slots[self._rank] = obj
        self._group.barrier.wait()
        snapshot = list(self._group.slots)
        self._group.barrier.wait()
        return snapshot

    def bcast(self, obj, root=0):
        return self._exchange(obj)[root]

    def scatter(self, sendobj, root=0):
        chunks = self._exchange(sendobj)[root]
        assert len(chunks) == self._group.size
        return chunks[self._rank]

    def gather(self, sendobj, root=0):
        values = self._exchange(sendobj)
        return values if self._rank == root else None

    def reduce(self, sendobj, op=operator.add, root=0):
        values = self._exchange(sendobj)
        return functools.reduce(op, values) if self._rank == root else None

    def barrier(self):
        self._group.barrier.wait()


def run_ranks(size, target):
    """Call target(ctx) on `size` thread-ranks; return the results by rank."""
    group = _Group(size)
    results = [None] * size
    errors = []

    def body(rank):
        ctx = MPIContext(comm=ThreadComm(group, rank), reduce_op=operator.add)
        try:
            results[rank] = target(ctx)
        except BaseException as exc:  # reported to the test thread below
            errors.append(exc)
            group.barrier.abort()

    threads = [threading.Thread(target=body, args=(rank,)) for rank in range(size)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    if errors:
        raise errors[0]
    return results


@pytest.fixture
def ranks():
    return run_ranks


@pytest.fixture
def write_list(tmp_path):
    """Write a list file from integers (or raw lines) and return its path."""

    def _write(values, name="list.txt", header=None):
        lines = [header if header is not None else f"list_len={len(values)}"]
        lines.extend(str(v) for v in values)
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="ascii")
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch, tmp_path):
    """Keep a real ~/.primelist.cnf out of the tests."""
    monkeypatch.setattr("primelist.config.DEFAULT_CONFIG_PATH", str(tmp_path / "absent.cnf"))


class _CloseFails:
    """File handle whose close() reports an I/O error after really closing."""

    def __init__(self, handle):
        self._handle = handle

    def __getattr__(self, name):
        return getattr(self._handle, name)

    def __iter__(self):
        return iter(self._handle)

    def close(self):
        self._handle.close()
        raise OSError(errno.EIO, "Input/output error")


@pytest.fixture
def failing_close(monkeypatch):
    """Make close() fail for files primelist.listfile opens in the given mode ("r" or "w")."""

    def _install(mode):
        def fake_open(path, file_mode="r", *args, **kwargs):
            handle = builtins.open(path, file_mode, *args, **kwargs)
            return _CloseFails(handle) if file_mode.startswith(mode) else handle

        monkeypatch.setattr("primelist.listfile.open", fake_open, raising=False)

    return _install
