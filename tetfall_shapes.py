
"""Shape catalog: canonical rotation tables and outline classification.

Shapes are lists of rows; a row's length is its own (trailing empty cells
are dropped), so callers must never assume a rectangular matrix. A non-zero
cell is a color marker for its kind, 1..7 in ``PIECES`` order.
"""
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

Shape = List[List[int]]

PIECES = ["I", "J", "L", "O", "S", "T", "Z"]
FRAGMENT = "fragment"

MARKERS: Dict[str, int] = {t: i + 1 for i, t in enumerate(PIECES)}

PIVOT_MAX: Dict[str, int] = {"I": 3, "O": 0}

# Rotation states in clockwise order. Two-state kinds repeat every other
# step, O has a single state.
ROTATIONS: Dict[str, List[List[List[int]]]] = {
    "I": [[[1, 1, 1, 1]],
          [[1], [1], [1], [1]]],
    "J": [[[1, 1, 1], [0, 0, 1]],
          [[0, 1], [0, 1], [1, 1]],
          [[1], [1, 1, 1]],
          [[1, 1], [1], [1]]],
    "L": [[[1, 1, 1], [1]],
          [[1, 1], [0, 1], [0, 1]],
          [[0, 0, 1], [1, 1, 1]],
          [[1], [1], [1, 1]]],
    "O": [[[1, 1], [1, 1]]],
    "S": [[[0, 1, 1], [1, 1]],
          [[1], [1, 1], [0, 1]]],
    "T": [[[1, 1, 1], [0, 1]],
          [[0, 1], [1, 1], [0, 1]],
          [[0, 1], [1, 1, 1]],
          [[1], [1, 1], [1]]],
    "Z": [[[1, 1], [0, 1, 1]],
          [[0, 1], [1, 1], [1]]],
}


def pivot_max(t: str) -> int:
    if t == FRAGMENT:
        return 0
    return PIVOT_MAX.get(t, 1)


def shape_for(t: str, state: int) -> Shape:
    """Return a fresh copy of the canonical shape of kind ``t`` at ``state``."""
    if t not in ROTATIONS:
        raise ValueError(f"no rotation table for piece kind {t!r}")
    table = ROTATIONS[t]
    marker = MARKERS[t]
    mask = table[state % len(table)]
    return [[marker if v else 0 for v in row] for row in mask]


def mask_of(shape: Sequence[Sequence[int]]) -> Tuple[Tuple[int, ...], ...]:
    """Occupancy mask of a shape: 1 where a cell carries any marker."""
    return tuple(tuple(1 if v != 0 else 0 for v in row) for row in shape)


# -------------------------------------------------------------
# OUTLINES
# -------------------------------------------------------------
# Perimeters are closed polygons in (x, y) cell units relative to the
# shape's top-left corner; renderers scale them by the cell size.

@dataclass(frozen=True)
class Outline:
    name: str
    mask: Tuple[Tuple[int, ...], ...]
    perimeter: Tuple[Tuple[int, int], ...]

    def __bool__(self) -> bool:
        return bool(self.perimeter)


def _outline(name, mask, perimeter) -> Outline:
    return Outline(name,
                   tuple(tuple(row) for row in mask),
                   tuple(tuple(p) for p in perimeter))


UNKNOWN = Outline("unknown", (), ())

KNOWN_OUTLINES: Tuple[Outline, ...] = (
    # fragments
    _outline("mono",       [[1]],                 [[0,0],[0,1],[1,1],[1,0]]),
    _outline("duo-h",      [[1,1]],               [[0,0],[0,1],[2,1],[2,0]]),
    _outline("duo-v",      [[1],[1]],             [[0,0],[0,2],[1,2],[1,0]]),
    _outline("trio-h",     [[1,1,1]],             [[0,0],[0,1],[3,1],[3,0]]),
    _outline("trio-v",     [[1],[1],[1]],         [[0,0],[0,3],[1,3],[1,0]]),
    _outline("corner-ne",  [[1,1],[0,1]],         [[0,0],[0,1],[1,1],[1,2],[2,2],[2,0]]),
    _outline("corner-se",  [[0,1],[1,1]],         [[1,0],[1,1],[0,1],[0,2],[2,2],[2,0]]),
    _outline("corner-sw",  [[1],[1,1]],           [[0,0],[0,2],[2,2],[2,1],[1,1],[1,0]]),
    _outline("corner-nw",  [[1,1],[1]],           [[0,0],[0,2],[1,2],[1,1],[2,1],[2,0]]),
    # I
    _outline("I0",         [[1,1,1,1]],           [[0,0],[0,1],[4,1],[4,0]]),
    _outline("I1",         [[1],[1],[1],[1]],     [[0,0],[0,4],[1,4],[1,0]]),
    # J
    _outline("J0",         [[1,1,1],[0,0,1]],     [[0,0],[0,1],[2,1],[2,2],[3,2],[3,0]]),
    _outline("J1",         [[0,1],[0,1],[1,1]],   [[1,0],[1,2],[0,2],[0,3],[2,3],[2,0]]),
    _outline("J2",         [[1],[1,1,1]],         [[0,0],[0,2],[3,2],[3,1],[1,1],[1,0]]),
    _outline("J3",         [[1,1],[1],[1]],       [[0,0],[0,3],[1,3],[1,1],[2,1],[2,0]]),
    # L
    _outline("L0",         [[1,1,1],[1]],         [[0,0],[0,2],[1,2],[1,1],[3,1],[3,0]]),
    _outline("L1",         [[1,1],[0,1],[0,1]],   [[0,0],[0,1],[1,1],[1,3],[2,3],[2,0]]),
    _outline("L2",         [[0,0,1],[1,1,1]],     [[2,0],[2,1],[0,1],[0,2],[3,2],[3,0]]),
    _outline("L3",         [[1],[1],[1,1]],       [[0,0],[0,3],[2,3],[2,2],[1,2],[1,0]]),
    # O
    _outline("O",          [[1,1],[1,1]],         [[0,0],[0,2],[2,2],[2,0]]),
    # S
    _outline("S0",         [[0,1,1],[1,1]],       [[1,0],[1,1],[0,1],[0,2],[2,2],[2,1],[3,1],[3,0]]),
    _outline("S1",         [[1],[1,1],[0,1]],     [[0,0],[0,2],[1,2],[1,3],[2,3],[2,1],[1,1],[1,0]]),
    # T
    _outline("T0",         [[1,1,1],[0,1]],       [[0,0],[0,1],[1,1],[1,2],[2,2],[2,1],[3,1],[3,0]]),
    _outline("T1",         [[0,1],[1,1],[0,1]],   [[1,0],[1,1],[0,1],[0,2],[1,2],[1,3],[2,3],[2,0]]),
    _outline("T2",         [[0,1],[1,1,1]],       [[1,0],[1,1],[0,1],[0,2],[3,2],[3,1],[2,1],[2,0]]),
    _outline("T3",         [[1],[1,1],[1]],       [[0,0],[0,3],[1,3],[1,2],[2,2],[2,1],[1,1],[1,0]]),
    # Z
    _outline("Z0",         [[1,1],[0,1,1]],       [[0,0],[0,1],[1,1],[1,2],[3,2],[3,1],[2,1],[2,0]]),
    _outline("Z1",         [[0,1],[1,1],[1]],     [[1,0],[1,1],[0,1],[0,3],[1,3],[1,2],[2,2],[2,0]]),
)


def classify(shape: Sequence[Sequence[int]]) -> Outline:
    """Return the registered outline for ``shape``, or ``UNKNOWN``.

    A match needs the same row count, the same length for every row and the
    same occupied cells. Markers are reduced to occupancy first, so a red and
    a cyan mono match the same entry.
    """
    mask = mask_of(shape)
    for outline in KNOWN_OUTLINES:
        if outline.mask == mask:
            return outline
    return UNKNOWN
