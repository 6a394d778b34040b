"""Built-in actions."""

from .adhoc import AdHocAction
from .archive import TarAction, ZipAction
from .argument import Argument, Key, Modified, Raw, argument_key, resolve_argument
from .echo import EchoAction
from .file import Copy, FileAction, FileJob, MakeDirectory, Remove
from .shell import ShellAction

__all__ = [
    "AdHocAction",
    "Argument",
    "Copy",
    "EchoAction",
    "FileAction",
    "FileJob",
    "Key",
    "MakeDirectory",
    "Modified",
    "Raw",
    "Remove",
    "ShellAction",
    "TarAction",
    "ZipAction",
    "argument_key",
    "resolve_argument",
]
