# turnroute/io/search_logging.py
import json
import logging
import sys

from turnroute.routing.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload)


def default_json_logger(name="turnroute", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    Structured JSON logs for shortest-path searches.
    search_start/search_end at INFO; per-node settles only when debug is on,
    sampled every `sample_every` settles.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        if logger is None:
            logger = default_json_logger(level=level)
            logger.setLevel("DEBUG" if debug else level)
        self.log = logger
        self._settles = 0

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    def search_start(self, *, start, goal, nodes):
        self._settles = 0
        self._emit("INFO", "search_start", start=start, goal=goal, nodes=nodes)

    def settle(self, *, node, cost, qsize):
        self._settles += 1
        if self.debug and (self._settles % self.sample_every) == 0:
            self._emit("DEBUG", "settle", node=node, cost=cost, qsize=qsize)

    def stale(self, *, node, cost, best):
        if self.debug:
            self._emit("DEBUG", "stale_skip", node=node, cost=cost, best=best)

    def search_end(self, *, start, goal, found, cost, settled, pushes, stale, wall_ms):
        extra = dict(
            start=start,
            goal=goal,
            found=found,
            cost=cost,
            settled=settled,
            pushes=pushes,
            stale=stale,
            wall_ms=wall_ms,
        )
        if found:
            self._emit("INFO", "search_end", **extra)
        else:
            self._emit("WARNING", "search_failed", **extra)
