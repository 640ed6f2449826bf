import sys
import threading
import uuid
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userdirectory.identifiers import next_id


def test_identifiers_carry_version_and_variant():
    identifier = next_id()
    assert isinstance(identifier, uuid.UUID)
    assert identifier.version == 7
    assert identifier.variant == uuid.RFC_4122


def test_identifiers_sort_by_creation():
    identifiers = [next_id() for _ in range(1000)]
    assert identifiers == sorted(identifiers)
    assert len(set(identifiers)) == 1000


def test_identifiers_round_trip_through_text():
    identifier = next_id()
    assert uuid.UUID(str(identifier)) == identifier
    assert hash(uuid.UUID(str(identifier))) == hash(identifier)


def test_concurrent_generation_produces_unique_identifiers():
    results = []
    lock = threading.Lock()

    def worker() -> None:
        local = [next_id() for _ in range(500)]
        assert local == sorted(local)
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 4000
    assert len(set(results)) == 4000
