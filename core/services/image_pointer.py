from __future__ import annotations


def loop_image_index_over_array(index: int, step: int, length: int) -> int:
    """Step `index` by `step` and wrap into `[0, length)`.

    Stepping left from 0 lands on `length - 1`. An empty sequence has no valid
    position, so the result stays at 0.
    """
    if length <= 0:
        return 0
    return (index + step) % length
