"""Core combinators: mapper, reducer, safe-call wrappers, transposer."""

from .mapper import (
    as_mapper,
    compact,
    discard,
    imap,
    keep,
    map2,
    map_,
    map_at,
    map_chr,
    map_dbl,
    map_if,
    map_int,
    map_lgl,
    pluck,
    pmap,
    walk,
)
from .reducer import Done, accumulate, accumulate_right, done, reduce_, reduce_right
from .safely import Quiet, possibly, quietly, safely
from .transpose import transpose

__all__ = [
    # Mapper
    "map_", "map_dbl", "map_int", "map_chr", "map_lgl", "map_if", "map_at", "map2", "pmap",
    "imap", "walk", "keep", "discard", "compact", "pluck", "as_mapper",
    # Reducer
    "reduce_", "reduce_right", "accumulate", "accumulate_right", "done", "Done",
    # Safe calls
    "safely", "possibly", "quietly", "Quiet",
    # Transposer
    "transpose",
]
