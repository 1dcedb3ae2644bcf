from __future__ import annotations
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .layer import LayerID
from .errors import (
    LayerNotFoundError,
    NodeNotFoundError,
    InvalidEdgeDirectionError,
    EdgeExistsError,
)

if TYPE_CHECKING:
    from .network import Network

def finite_float(value, what: str) -> float:
    """Coerces a number to float, rejecting bools, NaN and infinities."""
    if isinstance(value, bool):
        raise ValueError(f"{what} must be a number, got {value!r}")
    try:
        result = float(value)
    except OverflowError:
        raise ValueError(f"{what} is out of range") from None
    except (TypeError, ValueError):
        raise ValueError(f"{what} must be a number, got {value!r}") from None
    if not math.isfinite(result):
        raise ValueError(f"{what} must be finite, got {value!r}")
    return result

# =========================
# Node & Edge Structures
# =========================
@dataclass
class Node:
    id: int
    layer: LayerID
    threshold: float = 0.0
    value: Optional[float] = 0.0

    @staticmethod
    def create(network: "Network", layer: LayerID, threshold: float = 0.0) -> int:
        """
        Creates a node in `layer` and returns its id.
        The layer must already be declared in the network.
        """
        if not network.has_layer(layer):
            raise LayerNotFoundError(f"Layer {layer} does not exist")
        threshold = finite_float(threshold, "threshold")
        node_id = network._allocate_node_id()
        # Input nodes hold no value until one is assigned.
        value = None if layer.is_input else 0.0
        network._insert_node(Node(node_id, layer, threshold, value))
        return node_id

    def copy(self) -> "Node":
        return Node(self.id, self.layer, self.threshold, self.value)


@dataclass
class Edge:
    id: int
    source: int
    target: int
    weight: float

    @staticmethod
    def create(network: "Network", source: int, target: int, weight: float) -> int:
        """
        Creates a weighted edge `source -> target` and returns its id.

        Both nodes must exist, the target must sit in a strictly later
        layer than the source, and the pair must not already be connected.
        """
        Edge.check(network, source, target)
        weight = finite_float(weight, "weight")
        edge_id = network._allocate_edge_id()
        network._insert_edge(Edge(edge_id, source, target, weight))
        return edge_id

    def copy(self) -> "Edge":
        return Edge(self.id, self.source, self.target, self.weight)

    @staticmethod
    def check(network: "Network", source: int, target: int) -> None:
        """Raises if `source -> target` cannot be added to `network`."""
        src = network._nodes.get(source)
        if src is None:
            raise NodeNotFoundError(f"Source node {source} does not exist")
        dst = network._nodes.get(target)
        if dst is None:
            raise NodeNotFoundError(f"Target node {target} does not exist")
        if not dst.layer > src.layer:
            raise InvalidEdgeDirectionError(
                f"Edge {source} -> {target} must point from a lower layer to a higher one "
                f"({src.layer} -> {dst.layer})"
            )
        if network._find_edge(source, target) is not None:
            raise EdgeExistsError(f"Edge {source} -> {target} already exists")
