from tests.conftest import FakeClock
from ygl_proxy.utils.rate_limiter import RateLimiter


def test_allows_up_to_limit_then_blocks():
    clock = FakeClock()
    limiter = RateLimiter(requests_per_minute=3, clock=clock)

    decisions = [limiter.hit("1.2.3.4") for _ in range(4)]

    assert [d.allowed for d in decisions] == [True, True, True, False]
    assert [d.remaining for d in decisions[:3]] == [2, 1, 0]
    assert decisions[3].retry_after == 60.0


def test_window_slides():
    clock = FakeClock()
    limiter = RateLimiter(requests_per_minute=2, clock=clock)

    limiter.hit("a")
    clock.advance(30)
    limiter.hit("a")
    assert limiter.hit("a").allowed is False

    clock.advance(30)
    assert limiter.hit("a").allowed is True
    assert limiter.get_stats("a")["requests_in_window"] == 2


def test_keys_are_independent():
    limiter = RateLimiter(requests_per_minute=1, clock=FakeClock())
    assert limiter.hit("a").allowed is True
    assert limiter.hit("b").allowed is True
    assert limiter.hit("a").allowed is False


def test_zero_disables_limiting():
    limiter = RateLimiter(requests_per_minute=0)
    assert all(limiter.hit("a").allowed for _ in range(100))


def test_idle_clients_are_forgotten():
    clock = FakeClock()
    limiter = RateLimiter(requests_per_minute=5, clock=clock)

    limiter.hit("1.1.1.1")
    limiter.hit("2.2.2.2")
    clock.advance(61)
    limiter.hit("3.3.3.3")

    assert list(limiter.request_times) == ["3.3.3.3"]
