"""Opt-in thread pool mapping.

Results come back in input order, and a failure surfaces as the error of the
lowest-indexed failing element, matching the sequential mappers. What is NOT
preserved is the order in which ``f`` runs: side effects may interleave.
Calling these functions is the caller's acceptance of that.

Example:
    >>> with ThreadPool(max_workers=4) as pool:
    ...     pages = pool.map(fetch, urls)

    >>> # One-off, pool sized from settings.parallel.max_workers
    >>> sizes = map_parallel(paths, os.path.getsize)
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence, TypeVar

from mapfold.core.mapper import _column, _rebuild, _rows, as_mapper
from mapfold.foundation.config import get_settings
from mapfold.runtime.observability import get_logger

if TYPE_CHECKING:
    from types import TracebackType

T = TypeVar("T")

__all__ = ["ThreadPool", "map_parallel", "pmap_parallel"]

_log = get_logger("mapfold.pool")


@dataclass(slots=True)
class ThreadPool:
    """Ordered, fail-fast map over a ThreadPoolExecutor.

    Reusable across calls; shut down on context exit.
    """

    max_workers: int | None = None
    thread_name_prefix: str | None = None
    _executor: ThreadPoolExecutor | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        cfg = get_settings().parallel
        if self.max_workers is None:
            self.max_workers = cfg.max_workers
        if self.thread_name_prefix is None:
            self.thread_name_prefix = cfg.thread_name_prefix
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Get or create the underlying executor."""
        if self._executor is None:
            _log.debug("starting pool", max_workers=self.max_workers)
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers,
                                                thread_name_prefix=self.thread_name_prefix or "")
        return self._executor

    def map(self, f: Callable[..., T], items: Sequence[Any], *args: Any, **kwargs: Any) -> list[T]:
        """``[f(x, *args, **kwargs) for x in items]`` computed on the pool."""
        return self.starmap(f, [(x,) for x in items], *args, **kwargs)

    def starmap(self, f: Callable[..., T], rows: Sequence[tuple[Any, ...]], *args: Any, **kwargs: Any) -> list[T]:
        """``[f(*row, *args, **kwargs) for row in rows]`` computed on the pool.

        On the first failure (in input order) pending calls are cancelled and
        that error is raised.
        """
        futures: list[Future[T]] = [self.executor.submit(f, *row, *args, **kwargs) for row in rows]
        results: list[T] = []
        try:
            for fut in futures:
                results.append(fut.result())
        except BaseException:
            for fut in futures:
                fut.cancel()
            raise
        return results

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)
            self._executor = None

    def __enter__(self) -> ThreadPool:
        _ = self.executor
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.shutdown(wait=True, cancel_futures=exc_val is not None)


def map_parallel(seq: Any, f: Any, *args: Any, max_workers: int | None = None, **kwargs: Any) -> Any:
    """Parallel ``map_``: same output shape and error, unordered side effects."""
    fn = as_mapper(f)
    with ThreadPool(max_workers=max_workers) as pool:
        out = pool.map(fn, _column(seq), *args, **kwargs)
    return _rebuild(seq, seq.keys() if isinstance(seq, Mapping) else (), out)


def pmap_parallel(
    seqs: Sequence[Any] | Mapping[str, Any],
    f: Callable[..., T],
    *args: Any,
    max_workers: int | None = None,
    **kwargs: Any,
) -> list[T] | dict[Any, T]:
    """Parallel ``pmap`` over positional columns (a mapping of columns passes keywords).

    Raises:
        LengthMismatch: columns differ in length
    """
    rows = _rows("pmap_parallel", seqs)
    with ThreadPool(max_workers=max_workers) as pool:
        if isinstance(seqs, Mapping):
            names = list(seqs.keys())
            out = pool.map(lambda row: f(*args, **dict(zip(names, row)), **kwargs), rows)
        else:
            out = pool.starmap(f, rows, *args, **kwargs)
    first = next(iter(seqs.values() if isinstance(seqs, Mapping) else seqs), None)
    return _rebuild(first, first.keys() if isinstance(first, Mapping) else (), out)
