"""
Directional scoring.

Pure geometry: given a reference rect, a direction and candidate rects,
pick the candidate a D-pad press should land on.

A candidate qualifies when it lies entirely on the far side of the
reference edge facing the direction (1 unit of slack absorbs rounding
between adjacent elements). Qualifying candidates are ranked by

    primary_distance + 2 * perpendicular_offset

measured between centers, so an element straight ahead beats one that
is nearer but off to the side. The lowest score wins; the first
candidate wins ties.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from dpadnav.core.direction import Direction
from dpadnav.core.geometry import Rect

if TYPE_CHECKING:
    from dpadnav.focus.node import FocusableNode

EDGE_TOLERANCE = 1.0
PERPENDICULAR_WEIGHT = 2.0


def is_in_direction(reference: Rect, candidate: Rect, direction: Direction) -> bool:
    """Check if ``candidate`` lies in ``direction`` from ``reference``."""
    if direction == Direction.UP:
        return candidate.bottom <= reference.top + EDGE_TOLERANCE
    if direction == Direction.DOWN:
        return candidate.top >= reference.bottom - EDGE_TOLERANCE
    if direction == Direction.LEFT:
        return candidate.right <= reference.left + EDGE_TOLERANCE
    return candidate.left >= reference.right - EDGE_TOLERANCE


def directional_score(reference: Rect, candidate: Rect, direction: Direction) -> float:
    """
    Score a candidate (lower is better).

    Only meaningful for candidates that pass ``is_in_direction``.
    """
    ref_x, ref_y = reference.center
    cand_x, cand_y = candidate.center

    if direction == Direction.UP:
        primary = ref_y - cand_y
        perpendicular = abs(ref_x - cand_x)
    elif direction == Direction.DOWN:
        primary = cand_y - ref_y
        perpendicular = abs(ref_x - cand_x)
    elif direction == Direction.LEFT:
        primary = ref_x - cand_x
        perpendicular = abs(ref_y - cand_y)
    else:
        primary = cand_x - ref_x
        perpendicular = abs(ref_y - cand_y)

    return primary + perpendicular * PERPENDICULAR_WEIGHT


def best_in_direction(
    reference: Optional[Rect],
    candidates: Iterable[Tuple['FocusableNode', Optional[Rect]]],
    direction: Direction,
) -> Optional['FocusableNode']:
    """
    Find the best candidate in a direction.

    Args:
        reference: Rect of the node focus moves from
        candidates: (node, rect) pairs in deterministic order; a None or
            degenerate rect never qualifies
        direction: Direction of travel

    Returns:
        The winning node, or None if nothing lies in that direction
    """
    if reference is None or not reference.is_valid():
        return None

    best: Optional[FocusableNode] = None
    best_score = math.inf

    for node, rect in candidates:
        if rect is None or not rect.is_valid():
            continue
        if not is_in_direction(reference, rect, direction):
            continue

        score = directional_score(reference, rect, direction)
        if score < best_score:
            best_score = score
            best = node

    return best


def best_node_in_direction(
    current: 'FocusableNode',
    nodes: Iterable['FocusableNode'],
    direction: Direction,
) -> Optional['FocusableNode']:
    """
    Node-level wrapper around ``best_in_direction``.

    Skips ``current`` and nodes that cannot receive focus, and queries
    each rect lazily.
    """
    reference = current.bounding_rect()
    if reference is None:
        return None

    candidates = (
        (node, node.bounding_rect())
        for node in nodes
        if node is not current and node.can_receive_focus
    )
    return best_in_direction(reference, candidates, direction)


def reading_order(nodes: Sequence['FocusableNode']) -> List['FocusableNode']:
    """
    Sort nodes top-to-bottom, then left-to-right.

    Nodes without usable geometry go last, in their original order.
    """
    placed = []
    unplaced = []
    for index, node in enumerate(nodes):
        rect = node.bounding_rect()
        if rect is None:
            unplaced.append(node)
        else:
            placed.append(((rect.top, rect.left, index), node))

    placed.sort(key=lambda item: item[0])
    return [node for _, node in placed] + unplaced
