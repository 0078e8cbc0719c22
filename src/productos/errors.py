"""
Errors raised by the data-access layer.

Store faults are translated once, by the query executor, into the classes
below. "Not found" is never an exception: id-targeted operations return None.
"""

from typing import Optional


class ProductosError(Exception):
    """Base class for all errors raised by productos."""


class ConnectionFailure(ProductosError):
    """The store is unreachable or the connection was lost mid-query."""


class ConstraintViolation(ProductosError):
    """
    The store rejected a statement because of a constraint or type check.

    Attributes:
        constraint: Name of the violated constraint, when the store reports one
        sqlstate: Five-character SQLSTATE code
    """

    def __init__(
        self,
        message: str,
        constraint: Optional[str] = None,
        sqlstate: Optional[str] = None,
    ):
        super().__init__(message)
        self.constraint = constraint
        self.sqlstate = sqlstate
