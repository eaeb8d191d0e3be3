from .free_set import FreeSet
from .iter import IndexAfterIter, IndexIter
from .pool import (
    AlreadyInUse,
    AlreadyReturned,
    IndexPool,
    IndexPoolError,
)
from .ranges import Range
