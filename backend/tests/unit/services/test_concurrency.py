# tests/unit/services/test_concurrency.py
"""
Concurrent use of one snapshot storage.

Writers serialize the whole load-mutate-write cycle, so parallel creations
never lose updates and ids come out distinct and gapless.
"""

from __future__ import annotations

import json
import threading
from concurrent.futures import ThreadPoolExecutor

from chirpy.uow import SnapshotCoordinator

from tests.factories import create_user
from tests.helpers.auth import bearer

WORKERS = 8
CHIRPS = 40


def test_parallel_chirp_creation_yields_gapless_ids(store, db_path):
    author, _ = create_user(store)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        chirps = list(pool.map(lambda n: store.create_chirp(f"chirp {n}", author.id), range(CHIRPS)))

    ids = sorted(c.id for c in chirps)
    assert ids == list(range(1, CHIRPS + 1))
    document = json.loads(db_path.read_text(encoding="utf-8"))
    assert len(document["chirps"]) == CHIRPS
    assert document["next_chirp_id"] == CHIRPS + 1


def test_parallel_registrations_and_posts(services):
    """Mixed writers through the full service graph keep every record."""

    def register_and_post(n: int) -> int:
        out, password = create_user(
            services.store, email=f"worker{n}@example.com", password=f"password-{n}"
        )
        token = services.auth.login(out.email, password).tokens.access_token
        services.chirps.create_chirp(bearer(token), {"body": f"hello from {n}"})
        return out.id

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        user_ids = list(pool.map(register_and_post, range(20)))

    assert sorted(user_ids) == list(range(1, 21))
    chirps = services.store.get_chirps()
    assert [c.id for c in chirps] == list(range(1, 21))
    assert {c.author_id for c in chirps} == set(user_ids)


def test_readers_see_complete_snapshots_during_writes(store):
    author, _ = create_user(store)
    stop = threading.Event()

    def read_loop() -> None:
        while not stop.is_set():
            chirps = store.get_chirps()
            # A partial write would surface as a parse error or a gap.
            assert [c.id for c in chirps] == list(range(1, len(chirps) + 1))

    with ThreadPoolExecutor(max_workers=3) as pool:
        readers = [pool.submit(read_loop) for _ in range(2)]
        for n in range(25):
            store.create_chirp(f"c{n}", author.id)
        stop.set()
        for future in readers:
            future.result()

    assert len(store.get_chirps()) == 25


def test_coordinator_excludes_readers_while_writing():
    coordinator = SnapshotCoordinator()
    entered_read = threading.Event()

    def reader() -> None:
        with coordinator.read():
            entered_read.set()

    with coordinator.write():
        thread = threading.Thread(target=reader)
        thread.start()
        assert not entered_read.wait(timeout=0.2)
    thread.join(timeout=2)
    assert entered_read.is_set()


def test_coordinator_allows_overlapping_readers():
    coordinator = SnapshotCoordinator()
    barrier = threading.Barrier(2, timeout=2)

    def reader() -> None:
        with coordinator.read():
            barrier.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=3)
    assert not barrier.broken
