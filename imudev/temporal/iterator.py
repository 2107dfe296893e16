"""Joint, policy-driven iteration over state and observation sequences."""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from imudev.errors import IndexOutOfRange
from imudev.layouts.types import DataLayout
from imudev.temporal.policies import IterationPolicy, ZipIterPolicy


class _Cursor:
    """Forward-only read position into a sequence the caller keeps alive."""

    def __init__(self, items: Sequence[Any], name: str):
        self._items = items
        self._name = name
        self.position = 0

    def pop_front(self) -> Any:
        if self.position >= len(self._items):
            raise IndexOutOfRange(
                f"`{self._name}` exhausted after {len(self._items)} items"
            )
        item = self._items[self.position]
        self.position += 1
        return item

    def rewind(self) -> None:
        self.position = 0


class TimeseriesIterator:
    """Iterate jointly over states ``xx`` and observations ``yy``.

    Every step yields a pair ``(state_or_None, obs_or_None)``; the ``policy``
    decides at each 1-based step which of the two is drawn. Iteration stops
    after ``num_timepoints`` steps.

    The iterator is forward-only and not thread-safe: use one instance per
    worker.

    Step-counter invariant: :meth:`reset` rewinds the ``xx`` and ``yy`` cursors
    to their first element but does NOT reset the step counter. After a
    reset the next step number continues from where it stopped, so a fresh
    iteration that starts again at step 1 requires a new iterator.

    Args:
        xx: Per-timepoint states
        yy: Per-timepoint observations
        policy: Iteration policy (see :mod:`imudev.temporal.policies`)
        num_timepoints: Total number of steps; by default computed by the
            policy, which also validates the sequence lengths
    """

    def __init__(
        self,
        xx: Sequence[Any],
        yy: Sequence[Any],
        policy: Optional[IterationPolicy] = None,
        num_timepoints: Optional[int] = None,
    ):
        self.policy = ZipIterPolicy() if policy is None else policy
        if num_timepoints is None:
            num_timepoints = self.policy.total_steps(DataLayout.TIMESERIES, xx, yy)
        self.num_timepoints = num_timepoints
        self._xx = _Cursor(xx, "xx")
        self._yy = _Cursor(yy, "yy")
        self.step = 1

    def __iter__(self) -> "TimeseriesIterator":
        return self

    def __next__(self) -> Tuple[Any, Any]:
        if self.step > self.num_timepoints:
            raise StopIteration
        x = self._xx.pop_front() if self.policy.take_state(self.step) else None
        y = self._yy.pop_front() if self.policy.take_obs(self.step) else None
        self.step += 1
        return x, y

    def __len__(self) -> int:
        return self.num_timepoints

    def reset(self) -> None:
        """Rewind both cursors to the start; the step counter is left unchanged."""
        self._xx.rewind()
        self._yy.rewind()


def timeseries_iterator(
    xx: Sequence[Any],
    yy: Sequence[Any],
    policy: Optional[IterationPolicy] = None,
    *,
    num_timepoints: Optional[int] = None,
) -> TimeseriesIterator:
    """Recommended constructor for :class:`TimeseriesIterator`.

    Usually ``len(xx) == len(yy) == num_timepoints``, but a policy may define
    any other relation between them.
    """
    return TimeseriesIterator(xx, yy, policy, num_timepoints=num_timepoints)
