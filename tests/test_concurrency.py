import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

from tracker import UptimeTracker

THREADS = 8
PER_THREAD = 250


def test_concurrent_heartbeats_on_distinct_devices(base_time):
    tracker = UptimeTracker(timedelta(minutes=5))
    ids = [uuid.uuid4() for _ in range(THREADS * PER_THREAD)]

    def send(chunk):
        for device_id in chunk:
            tracker.record_heartbeat(device_id, base_time)
            tracker.record_heartbeat(device_id, base_time + timedelta(minutes=1))

    chunks = [ids[i::THREADS] for i in range(THREADS)]
    with ThreadPoolExecutor(max_workers=THREADS) as pool:
        list(pool.map(send, chunks))

    assert tracker.get_tracked_device_count() == len(ids)
    assert all(tracker.get_uptime_percentage(d) == 100.0 for d in ids)


def test_concurrent_heartbeats_on_one_device(base_time):
    """Interleaved heartbeats from many threads keep one consistent record."""
    tracker = UptimeTracker(timedelta(hours=1))
    device_id = "shared-device"
    barrier = threading.Barrier(THREADS)
    sent = {base_time + timedelta(seconds=s) for s in range(THREADS * PER_THREAD)}

    def send(worker):
        barrier.wait()
        for i in range(PER_THREAD):
            tracker.record_heartbeat(device_id, base_time + timedelta(seconds=worker * PER_THREAD + i))

    with ThreadPoolExecutor(max_workers=THREADS) as pool:
        list(pool.map(send, range(THREADS)))

    assert tracker.get_tracked_device_count() == 1
    assert tracker.get_first_seen(device_id) in sent
    assert tracker.get_last_heartbeat(device_id) in sent
    assert tracker.get_cumulative_uptime(device_id) >= timedelta(0)
    assert 0.0 <= tracker.get_uptime_percentage(device_id) <= 100.0


def test_readers_never_see_a_torn_record(base_time):
    tracker = UptimeTracker(timedelta(minutes=5))
    device_id = "device-under-load"
    tracker.record_heartbeat(device_id, base_time)
    stop = threading.Event()
    problems = []

    def writer():
        for i in range(1, 2000):
            tracker.record_heartbeat(device_id, base_time + timedelta(seconds=i))
        stop.set()

    def reader():
        while not stop.is_set():
            status = tracker.get_device_status(device_id, base_time)
            # heartbeats are 1 s apart and all within the interval
            if status.cumulative_uptime != status.last_heartbeat - status.first_seen:
                problems.append(status)

    threads = [threading.Thread(target=writer)] + [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert problems == []
    assert tracker.get_uptime_percentage(device_id) == 100.0


def test_removal_races_with_heartbeats(base_time):
    tracker = UptimeTracker(timedelta(minutes=5))
    ids = [f"device-{i}" for i in range(200)]

    def churn(device_id):
        tracker.record_heartbeat(device_id, base_time)
        tracker.remove_device(device_id)
        tracker.record_heartbeat(device_id, base_time + timedelta(minutes=1))

    with ThreadPoolExecutor(max_workers=THREADS) as pool:
        list(pool.map(churn, ids))

    assert tracker.get_tracked_device_count() == len(ids)
    for device_id in ids:
        assert tracker.get_first_seen(device_id) == base_time + timedelta(minutes=1)
