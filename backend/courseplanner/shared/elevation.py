"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
All windows here are measured in meters along the route, never in
sample counts, so results do not depend on GPS sampling density.
"""
from typing import List, Optional, Sequence, Tuple


def interpolate_missing(
    distances: Sequence[float],
    elevations: Sequence[Optional[float]]
) -> List[Optional[float]]:
    """
    Fill missing elevation values by linear interpolation over distance.

    Gaps at the start or end of the route take the nearest known value.
    If no value is known at all, the result stays all-None.

    Args:
        distances: Cumulative distance per point (meters, non-decreasing)
        elevations: Elevation per point, None where missing

    Returns:
        Elevations with gaps filled
    """
    known = [i for i, e in enumerate(elevations) if e is not None]
    if not known:
        return [None] * len(elevations)

    result: List[Optional[float]] = list(elevations)
    first, last = known[0], known[-1]

    for i in range(first):
        result[i] = elevations[first]
    for i in range(last + 1, len(elevations)):
        result[i] = elevations[last]

    for left, right in zip(known, known[1:]):
        if right - left < 2:
            continue
        d0, d1 = distances[left], distances[right]
        e0, e1 = elevations[left], elevations[right]
        span = d1 - d0
        for i in range(left + 1, right):
            t = (distances[i] - d0) / span if span > 0 else 0.0
            result[i] = e0 + t * (e1 - e0)

    return result


def window_average(
    distances: Sequence[float],
    values: Sequence[float],
    window_m: float
) -> List[float]:
    """
    Centered moving average over a fixed distance window.

    Each output value is the mean of all values whose distance lies within
    window_m / 2 of the current point. At the ends of the route the window
    is truncated rather than wrapped.

    Args:
        distances: Cumulative distance per point (meters, non-decreasing)
        values: Values to smooth
        window_m: Full window width in meters (<= 0 disables smoothing)

    Returns:
        Smoothed values, same length as input
    """
    n = len(values)
    if n == 0 or window_m <= 0:
        return list(values)

    half = window_m / 2
    prefix = [0.0]
    for v in values:
        prefix.append(prefix[-1] + v)

    smoothed = []
    lo = 0
    hi = 0
    for i in range(n):
        center = distances[i]
        while distances[lo] < center - half:
            lo += 1
        while hi < n and distances[hi] <= center + half:
            hi += 1
        smoothed.append((prefix[hi] - prefix[lo]) / (hi - lo))

    return smoothed


def accumulate_gain_loss(
    elevations: Sequence[float],
    noise_floor_m: float = 0.0
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss with a noise floor.

    Climbs and descents are counted between turning points. A turning
    point is confirmed once the series moves back from it by at least
    noise_floor_m, so sub-floor jitter never counts while slow steady
    climbs still add up. A trend still open at the end of the series is
    counted up to its extreme.

    Args:
        elevations: Elevation series (meters)
        noise_floor_m: Minimum reversal to confirm a turning point (meters)

    Returns:
        Tuple of (gain_m, loss_m)
    """
    gain = 0.0
    loss = 0.0
    if not elevations:
        return gain, loss

    anchor = elevations[0]
    extreme = anchor
    trend = 0  # 1 climbing, -1 descending, 0 not established

    for elevation in elevations[1:]:
        if trend == 0:
            if elevation > anchor and elevation - anchor >= noise_floor_m:
                trend = 1
                extreme = elevation
            elif elevation < anchor and anchor - elevation >= noise_floor_m:
                trend = -1
                extreme = elevation
        elif trend == 1:
            if elevation > extreme:
                extreme = elevation
            elif elevation < extreme and extreme - elevation >= noise_floor_m:
                gain += extreme - anchor
                anchor, extreme, trend = extreme, elevation, -1
        else:
            if elevation < extreme:
                extreme = elevation
            elif elevation > extreme and elevation - extreme >= noise_floor_m:
                loss += anchor - extreme
                anchor, extreme, trend = extreme, elevation, 1

    if trend == 1:
        gain += extreme - anchor
    elif trend == -1:
        loss += anchor - extreme

    return gain, loss
