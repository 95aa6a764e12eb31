from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PARSE = "PARSE"
    INVALID = "INVALID"


class GraphError(Exception):
    """Base class for domain errors raised by the graph store and its adapters.

    Catch ``GraphError`` and switch on ``kind`` to tell recoverable domain
    errors apart from programming defects (``TypeError`` and friends are never
    wrapped).

    Parameters
    --
    message : str
        Human-readable description naming the offending vertex or edge.

    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        # KeyError would otherwise repr-quote the message
        return self.message


class NotFoundError(GraphError, KeyError):
    """A referenced vertex or edge does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(GraphError, ValueError):
    """An edge (or explicit vertex number) is already present."""

    kind = ErrorKind.CONFLICT


class ParseError(GraphError, ValueError):
    """Malformed structured-document or matrix input."""

    kind = ErrorKind.PARSE


class InvalidOperationError(GraphError, ValueError):
    kind = ErrorKind.INVALID
