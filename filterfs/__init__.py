"""
filterfs

Wraps a filesystem with an ordered chain of filter filesystems.
Each filter sees every operation before the source filesystem does
and may reject it by raising.
"""

from filterfs.base import File, FileInfo, FSOperationType, Fs
from filterfs.chain import FilterChain, new_filter_chain
from filterfs.events import ChainDecision, ChainEvent
from filterfs.filter import PassThroughFilter

__version__ = "0.1.0"

__all__ = [
    "ChainDecision",
    "ChainEvent",
    "File",
    "FileInfo",
    "FilterChain",
    "FSOperationType",
    "Fs",
    "PassThroughFilter",
    "new_filter_chain",
]
