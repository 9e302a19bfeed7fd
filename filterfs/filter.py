"""
Pass-Through Filter Base

A filter that allows every operation and touches nothing. Subclass it
and override only the operations a filter needs to gate.
"""

from datetime import datetime

from filterfs.base import Fs


class PassThroughFilter(Fs):
    """
    Filter that lets every operation through without side effects.

    Usage:
        class NoRemove(PassThroughFilter):
            def remove(self, name):
                raise PermissionError(f"remove blocked: {name}")

        chain.add_filter(NoRemove())

    Methods that would return a file or metadata on a real filesystem
    return ``None`` here: a passing filter's return value is discarded
    by the chain.
    """

    def create(self, name: str) -> None:
        return None

    def open(self, name: str) -> None:
        return None

    def open_file(self, name: str, flag: int, perm: int) -> None:
        return None

    def mkdir(self, name: str, perm: int) -> None:
        return None

    def mkdir_all(self, path: str, perm: int) -> None:
        return None

    def remove(self, name: str) -> None:
        return None

    def remove_all(self, path: str) -> None:
        return None

    def rename(self, oldname: str, newname: str) -> None:
        return None

    def stat(self, name: str) -> None:
        return None

    def name(self) -> str:
        return type(self).__name__

    def chmod(self, name: str, mode: int) -> None:
        return None

    def chtimes(self, name: str, atime: datetime, mtime: datetime) -> None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
