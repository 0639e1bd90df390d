from .fs import copy_dir, remove_dir_all, try_canonicalize, TraversalCursor, REMOVE_ATTEMPTS
from ._retry import try_hard_limit
from ._exclude import ExcludeFilter
from .walk import walk_dir, Entry, is_hidden
from .exceptions import (
    MirrorError,
    IOFailure,
    FailedRemoval,
    RetryExhausted,
    UnclassifiableNameError,
    TraversalInvariantError,
    chain_err,
)

__all__ = [
    "copy_dir", "remove_dir_all", "try_canonicalize", "TraversalCursor", "REMOVE_ATTEMPTS",
    "try_hard_limit", "ExcludeFilter", "walk_dir", "Entry", "is_hidden",
    "MirrorError", "IOFailure", "FailedRemoval", "RetryExhausted",
    "UnclassifiableNameError", "TraversalInvariantError", "chain_err",
]
