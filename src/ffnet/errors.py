"""
Error types raised by network construction, firing, read-out and
(de)serialization.

Errors are grouped by the operation that raises them, so callers can catch
a whole family (``except CreateEdgeError``) or a single condition
(``except NodeNotFoundError``). Every operation checks before it mutates:
when one of these is raised the network is left as it was.
"""
from __future__ import annotations


class NetworkError(Exception):
    """Base class for every error raised by ffnet."""


# Operation families
class CreateNodeError(NetworkError):
    """Node creation failed."""

class CreateEdgeError(NetworkError):
    """Edge creation failed."""

class InputError(NetworkError):
    """Assigning input values failed."""

class FireError(NetworkError):
    """Firing the network failed."""

class ReadError(NetworkError):
    """Reading the output layer failed."""

class DeserializeError(NetworkError):
    """A snapshot could not be turned back into a network."""


class _LookupMessage:
    # KeyError.__str__ reprs its argument; keep the plain message instead.
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


# Concrete conditions
class LayerExistsError(NetworkError):
    """The layer has already been declared."""

class LayerNotFoundError(_LookupMessage, CreateNodeError, InputError, ReadError, KeyError):
    """The layer has not been declared in this network."""

class NodeNotFoundError(_LookupMessage, CreateEdgeError, InputError, KeyError):
    """No node with the given id exists in this network."""

class EdgeNotFoundError(_LookupMessage, NetworkError, KeyError):
    """No edge with the given id exists in this network."""

class InvalidEdgeDirectionError(CreateEdgeError):
    """The edge does not point from a lower layer to a higher one."""

class EdgeExistsError(CreateEdgeError):
    """An edge between the same source and target already exists."""

class DimensionMismatchError(InputError, ValueError):
    """The number of input values differs from the number of input nodes."""

class NotAnInputNodeError(InputError):
    """Only input-layer nodes accept externally assigned values."""

class UninitializedInputError(FireError):
    """The network was fired before every input node received a value."""

class NumericOverflowError(FireError, ArithmeticError):
    """A weighted sum or activation left the range of finite floats."""

class MalformedInputError(DeserializeError, ValueError):
    """The snapshot text is not a structurally valid network document."""

class ReferentialIntegrityError(DeserializeError):
    """The snapshot references a node or layer it does not declare."""
