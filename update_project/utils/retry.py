import asyncio
from functools import wraps
from typing import Callable, Tuple, Type, TypeVar
from update_project.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
):
    """指数バックオフでリトライするデコレータ

    retry_onに含まれる例外のみリトライし、それ以外は即座に送出します。

    Args:
        max_retries: 最大試行回数
        base_delay: 初回遅延時間（秒）
        retry_on: リトライ対象の例外クラス

    Returns:
        デコレータ関数
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            attempts = max(1, max_retries)
            for attempt in range(attempts):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt == attempts - 1:
                        raise

                    delay = base_delay * (2**attempt)
                    logger.warning(
                        f"Retry {attempt + 1}/{attempts} for {func.__name__} "
                        f"after {delay}s: {str(e)}"
                    )
                    await asyncio.sleep(delay)

        return wrapper

    return decorator
