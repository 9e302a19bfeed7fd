"""
Filter Chain

Runs every filesystem operation through an ordered chain of filter
filesystems before it reaches the source filesystem. The first filter
that raises stops the call; if none raise, the source handles it.
"""

from datetime import datetime, UTC
from typing import Any, Callable

from structlog import get_logger

from filterfs.base import File, FileInfo, FSOperationType, Fs
from filterfs.config import Settings, get_settings
from filterfs.events import ChainDecision, ChainEvent

logger = get_logger(__name__)


class FilterChain(Fs):
    """
    A filesystem that consults a chain of filters before its source.

    The most recently added filter is evaluated first. For each gated
    operation the identically-named method is called on every filter
    with the same arguments:

    - the first filter that raises ends the call, and its exception
      reaches the caller unchanged; no later filter and not the source
      are called
    - if every filter returns, the source is called once and its result
      (or exception) is relayed unchanged

    Return values of passing filters are discarded. A filter that is a
    real filesystem and returns an open ``File`` from a passing create or
    open leaks that handle; filters should return ``None``, as
    ``PassThroughFilter`` does. ``name()`` is never sent to the filters.

    A failing ``event_callback`` is logged and never replaces the
    relayed result or exception.

    The source should be a plain filesystem, not another FilterChain;
    express several filters by calling ``add_filter`` repeatedly. A
    nested chain still works and simply short-circuits one level deeper.

    The chain takes no locks. Add filters during setup, before the chain
    is shared between threads.

    Usage:
        chain = FilterChain(source_fs)
        chain.add_filter(audit_filter)
        chain.add_filter(read_only_filter)   # evaluated first

        chain.create("/a.txt")  # read_only_filter may raise here
    """

    def __init__(
        self,
        source: Fs,
        event_callback: Callable[[ChainEvent], None] | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the filter chain.

        Args:
            source: Filesystem that receives operations every filter allowed.
            event_callback: Called with a ChainEvent for each gated operation.
            settings: Logging behaviour; defaults to the global settings.
        """
        if source is None:
            raise TypeError("FilterChain requires a source filesystem")

        self.source = source
        self.event_callback = event_callback
        self.settings = settings if settings is not None else get_settings()

        self._chain: list[Fs] = []
        self._operation_count = 0
        self._rejected_count = 0
        self._source_error_count = 0

        logger.info(
            "filter_chain_initialized",
            source=repr(source),
        )

    def add_filter(self, fs: Fs) -> None:
        """Prepend a filter so that it runs before every filter added earlier."""
        if fs is None:
            raise TypeError("add_filter requires a filesystem")

        self._chain.insert(0, fs)

        logger.debug(
            "filter_added",
            filter=repr(fs),
            chain_length=len(self._chain),
        )

    @property
    def filters(self) -> tuple[Fs, ...]:
        """Filters in evaluation order."""
        return tuple(self._chain)

    # =========================================================================
    # Gated Operations
    # =========================================================================

    def create(self, name: str) -> File:
        return self._evaluate(FSOperationType.CREATE, name)

    def open(self, name: str) -> File:
        return self._evaluate(FSOperationType.OPEN, name)

    def open_file(self, name: str, flag: int, perm: int) -> File:
        return self._evaluate(FSOperationType.OPEN_FILE, name, flag, perm)

    def mkdir(self, name: str, perm: int) -> None:
        return self._evaluate(FSOperationType.MKDIR, name, perm)

    def mkdir_all(self, path: str, perm: int) -> None:
        return self._evaluate(FSOperationType.MKDIR_ALL, path, perm)

    def remove(self, name: str) -> None:
        return self._evaluate(FSOperationType.REMOVE, name)

    def remove_all(self, path: str) -> None:
        return self._evaluate(FSOperationType.REMOVE_ALL, path)

    def rename(self, oldname: str, newname: str) -> None:
        return self._evaluate(FSOperationType.RENAME, oldname, newname)

    def stat(self, name: str) -> FileInfo:
        return self._evaluate(FSOperationType.STAT, name)

    def chmod(self, name: str, mode: int) -> None:
        return self._evaluate(FSOperationType.CHMOD, name, mode)

    def chtimes(self, name: str, atime: datetime, mtime: datetime) -> None:
        return self._evaluate(FSOperationType.CHTIMES, name, atime, mtime)

    def name(self) -> str:
        return self.source.name()

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _evaluate(self, operation: FSOperationType, *args: Any) -> Any:
        """Send an operation through the filters, then to the source."""
        # Snapshot so an add_filter during the call does not shift indexes
        chain = tuple(self._chain)
        start_time = datetime.now(UTC)
        self._operation_count += 1

        for index, fs in enumerate(chain):
            self._trace(operation, args, fs, index)
            try:
                getattr(fs, operation.value)(*args)
            except Exception as e:
                self._rejected_count += 1
                if self.settings.log_rejections:
                    logger.warning(
                        "filter_chain_rejected",
                        operation=operation.value,
                        path=str(args[0]),
                        filter_index=index,
                        filter=repr(fs),
                        error_type=type(e).__name__,
                    )
                self._emit_event(
                    operation, args, ChainDecision.REJECTED, start_time,
                    filters_evaluated=index + 1,
                    rejected_by=index,
                    rejected_by_name=repr(fs),
                    error=e,
                )
                raise

        self._trace(operation, args, self.source, None)
        try:
            result = getattr(self.source, operation.value)(*args)
        except Exception as e:
            self._source_error_count += 1
            self._emit_event(
                operation, args, ChainDecision.SOURCE_ERROR, start_time,
                filters_evaluated=len(chain),
                error=e,
            )
            raise

        self._emit_event(
            operation, args, ChainDecision.ALLOWED, start_time,
            filters_evaluated=len(chain),
        )
        return result

    def _trace(
        self,
        operation: FSOperationType,
        args: tuple,
        fs: Fs,
        index: int | None,
    ) -> None:
        if not self.settings.trace_operations:
            return
        logger.debug(
            "filter_chain_hop",
            operation=operation.value,
            path=str(args[0]),
            target="source" if index is None else f"filter[{index}]",
            fs=repr(fs),
        )

    def _emit_event(
        self,
        operation: FSOperationType,
        args: tuple,
        decision: ChainDecision,
        start_time: datetime,
        filters_evaluated: int = 0,
        rejected_by: int | None = None,
        rejected_by_name: str | None = None,
        error: Exception | None = None,
    ) -> None:
        """Build a ChainEvent and hand it to the callback, if any."""
        if not self.event_callback:
            return

        latency = (datetime.now(UTC) - start_time).total_seconds() * 1000
        event = ChainEvent(
            operation=operation,
            path=str(args[0]),
            target_path=str(args[1]) if operation == FSOperationType.RENAME else None,
            decision=decision,
            filters_evaluated=filters_evaluated,
            rejected_by=rejected_by,
            rejected_by_name=rejected_by_name,
            error_type=type(error).__name__ if error else None,
            error_message=str(error) if error else None,
            latency_ms=latency,
        )
        try:
            self.event_callback(event)
        except Exception:
            logger.exception(
                "filter_chain_event_callback_failed",
                operation=operation.value,
                path=str(args[0]),
                decision=decision.value,
            )

    @property
    def stats(self) -> dict:
        """Get chain statistics."""
        return {
            "operation_count": self._operation_count,
            "rejected_count": self._rejected_count,
            "source_error_count": self._source_error_count,
        }

    def __repr__(self) -> str:
        return f"FilterChain(source={self.source!r}, filters={len(self._chain)})"


def new_filter_chain(source: Fs) -> FilterChain:
    """Create a FilterChain with no filters around ``source``."""
    return FilterChain(source)
