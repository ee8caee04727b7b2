from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

log = logging.getLogger("runreport.telemetry")


@contextmanager
def timed(stage: str, **ctx: Any) -> Iterator[Dict[str, Any]]:
    """Log a ``timing`` record for the wrapped stage.

    The yielded dict is merged into the record's extras, so callers can attach
    figures they only know once the stage has run.
    """
    extra: Dict[str, Any] = dict(ctx)
    start = time.perf_counter()
    try:
        yield extra
    finally:
        extra.update(stage=stage, ms=int((time.perf_counter() - start) * 1000))
        log.info("timing", extra=extra)
