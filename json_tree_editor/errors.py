"""Exception types raised by the tree editing core."""

from __future__ import annotations


class TreeEditError(Exception):
    """Base class for expected, recoverable editing failures."""


class PathError(TreeEditError, LookupError):
    """A path does not resolve against the current tree."""

    def __init__(self, message: str, path=()):
        super().__init__(message)
        self.path = tuple(path)


class KeyCollisionError(PathError):
    """A rename would overwrite an existing key."""


class NodeTypeError(TreeEditError, TypeError):
    """The operation is not valid for the kind of node it targets."""


class JsonParseError(TreeEditError, ValueError):
    """Whole-document text is not valid JSON."""


class PersistenceError(TreeEditError):
    """The save collaborator reported a failure."""


class EditorStateError(TreeEditError):
    """The editor is not in a state that allows the requested action."""
