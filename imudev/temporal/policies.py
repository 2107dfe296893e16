"""Iteration policies for TimeseriesIterator.

A policy decides, at every iteration step (1-based), whether the iterator
draws the next state and/or the next observation, and how many steps the
iteration lasts for a given pair of sequences.
"""
from __future__ import annotations

from typing import Protocol, Sequence

from imudev.errors import PolicyError
from imudev.layouts.queries import num_timepoints
from imudev.layouts.types import DataLayout


class IterationPolicy(Protocol):
    """Protocol implemented by every iteration policy."""

    def take_state(self, step: int) -> bool: ...

    def take_obs(self, step: int) -> bool: ...

    def total_steps(self, layout: DataLayout, xx: Sequence, yy: Sequence) -> int: ...


class ZipIterPolicy:
    """Pair every state with the observation at the same timepoint."""

    def take_state(self, step: int) -> bool:
        return True

    def take_obs(self, step: int) -> bool:
        return True

    def total_steps(self, layout: DataLayout, xx: Sequence, yy: Sequence) -> int:
        n_xx = num_timepoints(layout, xx)
        n_yy = num_timepoints(layout, yy)
        if n_xx != n_yy:
            raise PolicyError(
                f"Number of timepoints in `xx` ({n_xx}) and `yy` ({n_yy}) must be "
                f"the same for policy {type(self).__name__}"
            )
        return n_xx

    def __repr__(self) -> str:
        return "ZipIterPolicy()"


class TakeInitialStatePolicy:
    """Take only the first state, then every observation.

    Step 1 yields ``(xx[0], yy[0])``; later steps yield ``(None, yy[k])``.
    """

    def take_state(self, step: int) -> bool:
        return step == 1

    def take_obs(self, step: int) -> bool:
        return True

    def total_steps(self, layout: DataLayout, xx: Sequence, yy: Sequence) -> int:
        if num_timepoints(layout, xx) < 1:
            raise PolicyError(
                f"`xx` must contain at least one point under policy {type(self).__name__}"
            )
        n_yy = num_timepoints(layout, yy)
        if n_yy < 1:
            raise PolicyError(
                f"`yy` must contain at least one point under policy {type(self).__name__}"
            )
        return n_yy

    def __repr__(self) -> str:
        return "TakeInitialStatePolicy()"


class TakeInitialStateNoMatchingObsPolicy:
    """Take only the first state, which has no observation of its own.

    Step 1 yields ``(xx[0], None)``; step ``k > 1`` yields ``(None, yy[k-2])``,
    so the iteration lasts ``len(yy) + 1`` steps.
    """

    def take_state(self, step: int) -> bool:
        return step == 1

    def take_obs(self, step: int) -> bool:
        return step != 1

    def total_steps(self, layout: DataLayout, xx: Sequence, yy: Sequence) -> int:
        if num_timepoints(layout, xx) < 1:
            raise PolicyError(
                f"`xx` must contain at least one point under policy {type(self).__name__}"
            )
        return num_timepoints(layout, yy) + 1

    def __repr__(self) -> str:
        return "TakeInitialStateNoMatchingObsPolicy()"
