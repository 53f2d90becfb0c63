"""Throttled snapshot emission."""

from ..models import Snapshot
from ..schema import DEFAULT_OUTPUT_FACTOR
from .accumulator import UsageAccumulator


class SnapshotEmitter:
    """
    Decides when a snapshot of the aggregate is worth producing.

    Building a snapshot copies every group, which is expensive for very
    large buckets or depths, so by default one is produced only every
    ``output_factor`` accumulated records.
    """

    def __init__(self, output_factor: int = DEFAULT_OUTPUT_FACTOR) -> None:
        self.output_factor = output_factor
        self._emitted = 0

    @property
    def emitted_count(self) -> int:
        return self._emitted

    def after_accumulate(self, accumulator: UsageAccumulator) -> Snapshot | None:
        """
        Emit a snapshot if ``output_factor`` records have accumulated.

        Returns:
            Snapshot, or None if the throttle has not been reached
        """
        if accumulator.pending < self.output_factor:
            return None
        return self._emit(accumulator)

    def finish(self, accumulator: UsageAccumulator) -> Snapshot | None:
        """
        Emit the final snapshot at end of stream.

        Returns None when every accumulated record is already covered by
        an emitted snapshot.
        """
        if accumulator.pending == 0:
            return None
        return self._emit(accumulator)

    def _emit(self, accumulator: UsageAccumulator) -> Snapshot:
        self._emitted += 1
        snapshot = accumulator.snapshot(sequence=self._emitted)
        accumulator.reset_pending()
        return snapshot
