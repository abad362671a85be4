import time
from typing import Callable, Coroutine

from loguru import logger

HTTP_REGEX = r"(https?://)?(www\.)?"


def timeit_async[**P, R](
    func: Callable[P, Coroutine[None, None, R]]
) -> Callable[P, Coroutine[None, None, R]]:
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.time()
        try:
            return await func(*args, **kwargs)
        finally:
            logger.debug(f"{func.__name__} took {time.time() - start:.3f} seconds")

    return wrapper
