# util/timing.py
import time
from contextlib import contextmanager
from typing import Any, Iterator
import logging


@contextmanager
def timed(
    logger: logging.Logger, name: str, level: int = logging.DEBUG, **kv: Any
) -> Iterator[None]:
    """
    Usage:
      with timed(logger, "aps.oss.objects", page=2):
          ...
    Emits one record on exit: "<name>.done ms=<int> key=val ..."
    A failing block is still timed, tagged failed=1, and re-raised.
    """
    t0 = time.perf_counter()
    failed = False
    try:
        yield
    except Exception:
        failed = True
        raise
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        if failed:
            suffix += " failed=1"
        logger.log(level, "%s.done ms=%d%s", name, dt_ms, suffix)
