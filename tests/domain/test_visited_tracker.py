import threading

from listcrawl.domain.visited_tracker import VisitedTracker


def test_first_claim_succeeds():
    tracker = VisitedTracker()
    assert tracker.claim("http://example.com/a/")


def test_second_claim_of_same_url_is_rejected():
    tracker = VisitedTracker()
    assert tracker.claim("http://example.com/a/")
    assert not tracker.claim("http://example.com/a/")
    assert not tracker.claim("http://example.com/a/")


def test_different_urls_claimed_independently():
    tracker = VisitedTracker()
    assert tracker.claim("http://example.com/a/")
    assert tracker.claim("http://example.com/b/")
    assert "http://example.com/a/" in tracker
    assert "http://example.com/c/" not in tracker
    assert len(tracker) == 2


def test_tracker_exposes_no_separate_mark_operation():
    tracker = VisitedTracker()
    assert not hasattr(tracker, "mark")
    assert not hasattr(tracker, "is_visited")


def test_concurrent_claims_grant_each_url_exactly_once():
    tracker = VisitedTracker()
    urls = [f"http://example.com/{i}.zip" for i in range(200)]
    wins = []
    wins_lock = threading.Lock()
    start = threading.Barrier(8)

    def worker():
        start.wait()
        mine = [u for u in urls if tracker.claim(u)]
        with wins_lock:
            wins.extend(mine)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(wins) == sorted(urls)
    assert len(tracker) == len(urls)
