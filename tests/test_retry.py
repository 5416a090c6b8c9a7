import pytest

from update_project.utils import retry as retry_module
from update_project.utils.retry import retry_with_backoff


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    delays: list[float] = []

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr(retry_module.asyncio, "sleep", fake_sleep)
    return delays


@pytest.mark.asyncio
async def test_retries_listed_exceptions_with_backoff(no_sleep: list[float]) -> None:
    attempts = []

    @retry_with_backoff(max_retries=3, base_delay=1.0, retry_on=(ConnectionError,))
    async def flaky() -> str:
        attempts.append(1)
        if len(attempts) < 3:
            raise ConnectionError("reset")
        return "ok"

    assert await flaky() == "ok"
    assert len(attempts) == 3
    assert no_sleep == [1.0, 2.0]


@pytest.mark.asyncio
async def test_raises_after_last_attempt() -> None:
    attempts = []

    @retry_with_backoff(max_retries=2, retry_on=(ConnectionError,))
    async def always_fails() -> None:
        attempts.append(1)
        raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        await always_fails()
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_other_exceptions_are_not_retried(no_sleep: list[float]) -> None:
    attempts = []

    @retry_with_backoff(max_retries=3, retry_on=(ConnectionError,))
    async def bad_request() -> None:
        attempts.append(1)
        raise ValueError("bad")

    with pytest.raises(ValueError):
        await bad_request()
    assert len(attempts) == 1
    assert no_sleep == []


@pytest.mark.asyncio
async def test_zero_retries_still_attempts_once() -> None:
    @retry_with_backoff(max_retries=0)
    async def once() -> int:
        return 1

    assert await once() == 1
