"""Partitioning of a long recording into equal-length chunks."""

from __future__ import annotations

import math

from transcript.data_models import ChunkPlan


def calculate_chunk_count(total_duration: float, max_chunk_duration: float) -> int:
    """Number of chunks needed so none exceeds ``max_chunk_duration``.

    A non-positive or non-finite limit means "no limit".
    """
    if not math.isfinite(total_duration) or total_duration <= 0:
        return 0
    if not math.isfinite(max_chunk_duration) or max_chunk_duration <= 0:
        return 1
    return math.ceil(total_duration / max_chunk_duration)


def plan_chunks(total_duration: float, max_chunk_duration: float) -> list[ChunkPlan]:
    """Split ``[0, total_duration)`` into equal chunks no longer than the limit.

    Chunks are sized ``total / count`` instead of ``max_chunk_duration`` so
    there is no short trailing remainder. The last chunk runs to
    ``total_duration`` exactly.
    """
    count = calculate_chunk_count(total_duration, max_chunk_duration)
    if count == 0:
        return []
    if count == 1:
        return [ChunkPlan(offset=0.0, duration=total_duration)]

    chunk_duration = total_duration / count
    plans = [
        ChunkPlan(offset=i * chunk_duration, duration=chunk_duration)
        for i in range(count - 1)
    ]
    last_offset = (count - 1) * chunk_duration
    plans.append(
        ChunkPlan(offset=last_offset, duration=total_duration - last_offset)
    )
    return plans
