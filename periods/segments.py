"""Equal-length partitioning of a half-day span.

All arithmetic runs on integer microseconds. Every boundary is derived from the
span start as ``round(segment_length * k)`` instead of by adding segment lengths
one after another, so a boundary is identical no matter which neighbouring
segment computes it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Tuple

__all__ = ["Segment", "locate", "partition", "segment_at", "to_microseconds"]

_MICROSECOND = timedelta(microseconds=1)


@dataclass(frozen=True)
class Segment:
    """One slice of a day or night span."""

    index: int
    start: datetime
    end: datetime
    is_daytime: bool

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


def to_microseconds(delta: timedelta) -> int:
    """Exact integer microseconds of *delta*."""

    return delta // _MICROSECOND


def _check_span(span_start: datetime, span_end: datetime, segment_count: int) -> int:
    if segment_count < 1:
        raise ValueError(f"segment_count must be positive, got {segment_count}")
    span_us = to_microseconds(span_end - span_start)
    if span_us <= 0:
        raise ValueError(
            f"span end {span_end.isoformat()} must follow span start {span_start.isoformat()}"
        )
    return span_us


def _boundary(span_start: datetime, segment_length: float, k: int) -> datetime:
    return span_start + timedelta(microseconds=round(segment_length * k))


def locate(
    instant: datetime,
    span_start: datetime,
    span_end: datetime,
    segment_count: int,
) -> Tuple[int, datetime, datetime]:
    """Return ``(index, start, end)`` of the segment of the span holding *instant*.

    Instants outside the span are clamped onto the first or last segment.
    """

    span_us = _check_span(span_start, span_end, segment_count)
    segment_length = span_us / segment_count
    elapsed_us = to_microseconds(instant - span_start)

    index = math.floor(elapsed_us / segment_length)
    index = max(min(index, segment_count - 1), 0)

    start = _boundary(span_start, segment_length, index)
    end = _boundary(span_start, segment_length, index + 1)
    # The float floor and the rounded boundaries can disagree by one slot when
    # the instant sits within a microsecond of a boundary.
    if instant >= end and index < segment_count - 1:
        index += 1
        start, end = end, _boundary(span_start, segment_length, index + 1)
    elif instant < start and index > 0:
        index -= 1
        start, end = _boundary(span_start, segment_length, index), start
    return index, start, end


def segment_at(
    instant: datetime,
    span_start: datetime,
    span_end: datetime,
    segment_count: int,
    *,
    is_daytime: bool,
) -> Segment:
    index, start, end = locate(instant, span_start, span_end, segment_count)
    return Segment(index=index, start=start, end=end, is_daytime=is_daytime)


def partition(
    span_start: datetime,
    span_end: datetime,
    segment_count: int,
    *,
    is_daytime: bool,
) -> List[Segment]:
    """Split the span into *segment_count* contiguous segments, earliest first."""

    span_us = _check_span(span_start, span_end, segment_count)
    segment_length = span_us / segment_count
    boundaries = [
        _boundary(span_start, segment_length, k) for k in range(segment_count + 1)
    ]
    return [
        Segment(index=k, start=boundaries[k], end=boundaries[k + 1], is_daytime=is_daytime)
        for k in range(segment_count)
    ]
