import time
from contextlib import contextmanager

from loguru import logger


@contextmanager
def timed(stage_name: str):
    t0 = time.perf_counter()
    try:
        yield
        dt = int((time.perf_counter() - t0) * 1000)
        logger.debug(f"{stage_name} ok in {dt}ms")
    except Exception as e:
        dt = int((time.perf_counter() - t0) * 1000)
        logger.debug(f"{stage_name} failed in {dt}ms: {e}")
        raise
