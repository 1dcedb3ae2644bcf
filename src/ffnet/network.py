from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .activation import resolve_activation
from .elements import Node, Edge, finite_float
from .errors import (
    LayerExistsError,
    LayerNotFoundError,
    NodeNotFoundError,
    EdgeNotFoundError,
    DimensionMismatchError,
    NotAnInputNodeError,
    UninitializedInputError,
    NumericOverflowError,
)
from .layer import LayerID, INPUT_LAYER, OUTPUT_LAYER

# =========================
# Configuration Parameters
# =========================
@dataclass
class NetworkConfig:
    activation: str = "sigmoid"
    step_threshold: float = 0.0

    def validate(self) -> None:
        """Checks the settings and normalises `step_threshold` to a float."""
        if not isinstance(self.activation, str):
            raise ValueError(f"activation must be a string, got {self.activation!r}")
        self.step_threshold = finite_float(self.step_threshold, "step_threshold")
        resolve_activation(self.activation, self.step_threshold)

    def copy(self) -> "NetworkConfig":
        return NetworkConfig(self.activation, self.step_threshold)

# =========================
# Network
# =========================
class Network:
    """
    A layered feedforward network of nodes and weighted edges.

    Nodes and edges live in tables keyed by integer id; a layer only keeps
    the ids of its members, in creation order. Edges always point from a
    lower layer to a higher one, so firing the layers in ascending order
    is a valid topological evaluation of the graph.

    Typical use:

        net = Network.default()
        net.add_layer(LayerID.hidden(0))
        i = Node.create(net, LayerID.input(), 0.0)
        h = Node.create(net, LayerID.hidden(0), 0.2)
        o = Node.create(net, LayerID.output(), 0.0)
        Edge.create(net, i, h, 1.3)
        Edge.create(net, h, o, 1.5)
        net.set_inputs([0.8])
        net.fire()
        outputs = net.get_outputs()

    Instances are not thread-safe; guard a shared network with a lock.
    """

    def __init__(self, config: Optional[NetworkConfig] = None, layers: Iterable[LayerID] = ()):
        self.config = config if config is not None else NetworkConfig()
        self.config.validate()
        self._layers: Dict[LayerID, List[int]] = {}
        self._nodes: Dict[int, Node] = {}
        self._edges: Dict[int, Edge] = {}
        self._incoming: Dict[int, List[int]] = {}
        self._outgoing: Dict[int, List[int]] = {}
        self._edge_by_pair: Dict[Tuple[int, int], int] = {}
        self._next_node_id = 1
        self._next_edge_id = 1
        for layer in layers:
            self.add_layer(layer)

    @classmethod
    def default(cls, config: Optional[NetworkConfig] = None) -> "Network":
        """A network with an empty input layer and an empty output layer."""
        return cls(config, layers=(INPUT_LAYER, OUTPUT_LAYER))

    @classmethod
    def empty(cls, config: Optional[NetworkConfig] = None) -> "Network":
        """A network with no layers at all."""
        return cls(config)

    # ---- layers ----
    def add_layer(self, layer: LayerID) -> None:
        if not isinstance(layer, LayerID):
            raise TypeError(f"Expected a LayerID, got {type(layer).__name__}")
        if layer in self._layers:
            raise LayerExistsError(f"Layer {layer} already exists")
        self._layers[layer] = []

    def has_layer(self, layer: LayerID) -> bool:
        return layer in self._layers

    def layers(self) -> List[LayerID]:
        return sorted(self._layers)

    def layer_nodes(self, layer: LayerID) -> List[int]:
        return list(self._members(layer))

    def _members(self, layer: LayerID) -> List[int]:
        members = self._layers.get(layer)
        if members is None:
            raise LayerNotFoundError(f"Layer {layer} does not exist")
        return members

    # ---- nodes & edges ----
    def add_node(self, layer: LayerID, threshold: float = 0.0) -> int:
        return Node.create(self, layer, threshold)

    def add_edge(self, source: int, target: int, weight: float) -> int:
        return Edge.create(self, source, target, weight)

    def get_node(self, node_id: int) -> Node:
        return self._node(node_id).copy()

    def get_edge(self, edge_id: int) -> Edge:
        edge = self._edges.get(edge_id)
        if edge is None:
            raise EdgeNotFoundError(f"Edge {edge_id} does not exist")
        return edge.copy()

    def nodes(self) -> List[Node]:
        return [self._nodes[nid].copy() for nid in sorted(self._nodes)]

    def edges(self) -> List[Edge]:
        return [self._edges[eid].copy() for eid in sorted(self._edges)]

    def incoming(self, node_id: int) -> List[Edge]:
        self._node(node_id)
        return [self._edges[eid].copy() for eid in self._incoming[node_id]]

    def outgoing(self, node_id: int) -> List[Edge]:
        self._node(node_id)
        return [self._edges[eid].copy() for eid in self._outgoing[node_id]]

    def _node(self, node_id: int) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(f"Node {node_id} does not exist")
        return node

    def _find_edge(self, source: int, target: int) -> Optional[int]:
        return self._edge_by_pair.get((source, target))

    def _allocate_node_id(self) -> int:
        nid = self._next_node_id
        self._next_node_id += 1
        return nid

    def _allocate_edge_id(self) -> int:
        eid = self._next_edge_id
        self._next_edge_id += 1
        return eid

    def _insert_node(self, node: Node) -> None:
        self._nodes[node.id] = node
        self._layers[node.layer].append(node.id)
        self._incoming[node.id] = []
        self._outgoing[node.id] = []
        self._next_node_id = max(self._next_node_id, node.id + 1)

    def _insert_edge(self, edge: Edge) -> None:
        self._edges[edge.id] = edge
        self._incoming[edge.target].append(edge.id)
        self._outgoing[edge.source].append(edge.id)
        self._edge_by_pair[(edge.source, edge.target)] = edge.id
        self._next_edge_id = max(self._next_edge_id, edge.id + 1)

    # ---- inputs ----
    def set_inputs(self, values: Sequence[float]) -> None:
        """Assigns `values` to the input nodes in creation order."""
        input_ids = self._members(INPUT_LAYER)
        values = list(values)
        if len(values) != len(input_ids):
            raise DimensionMismatchError(
                f"Expected {len(input_ids)} inputs, got {len(values)}"
            )
        values = [finite_float(v, "input value") for v in values]
        for nid, v in zip(input_ids, values):
            self._nodes[nid].value = v

    def set_node_value(self, node_id: int, value: float) -> None:
        node = self._node(node_id)
        if not node.layer.is_input:
            raise NotAnInputNodeError(f"Node {node_id} is in layer {node.layer}, not the input layer")
        node.value = finite_float(value, "input value")

    @property
    def inputs_ready(self) -> bool:
        return all(self._nodes[nid].value is not None for nid in self._layers.get(INPUT_LAYER, []))

    # ---- firing ----
    def fire(self) -> None:
        """
        Propagates the input values forward, one layer at a time.

        Hidden nodes take activation(sum - threshold) of their weighted
        inputs; output nodes keep the raw weighted sum. Values are staged
        and only written back once every layer has been computed.
        """
        unset = [nid for nid in self._layers.get(INPUT_LAYER, []) if self._nodes[nid].value is None]
        if unset:
            raise UninitializedInputError(
                f"Input nodes {unset} have no value; call set_inputs() before fire()"
            )
        activation = resolve_activation(self.config.activation, self.config.step_threshold)
        staged: Dict[int, float] = {}
        for layer in sorted(self._layers):
            if layer.is_input:
                continue
            for nid in self._layers[layer]:
                s = 0.0
                for eid in self._incoming[nid]:
                    edge = self._edges[eid]
                    src_value = staged.get(edge.source, self._nodes[edge.source].value)
                    s += src_value * edge.weight
                if layer.is_output:
                    staged[nid] = s
                else:
                    staged[nid] = activation(s - self._nodes[nid].threshold)
        overflowed = [nid for nid, v in staged.items() if not math.isfinite(v)]
        if overflowed:
            raise NumericOverflowError(f"Nodes {overflowed} overflowed to a non-finite value")
        for nid, v in staged.items():
            self._nodes[nid].value = v

    # ---- outputs ----
    def read(self, out: List[float]) -> None:
        """Appends the output node values (creation order) to `out`."""
        out.extend(self.get_outputs())

    def get_outputs(self) -> List[float]:
        return [self._nodes[nid].value for nid in self._members(OUTPUT_LAYER)]

    def forward(self, x_vec: Sequence[float]) -> List[float]:
        self.set_inputs(x_vec)
        self.fire()
        return self.get_outputs()

    __call__ = forward

    # ---- serialization ----
    def serialize(self) -> str:
        from .persistence import network_to_json
        return network_to_json(self)

    @classmethod
    def deserialize(cls, text: str) -> "Network":
        from .persistence import network_from_json
        return network_from_json(text)

    def copy(self) -> "Network":
        net = Network(self.config.copy(), layers=self._layers)
        for nid in sorted(self._nodes):
            net._insert_node(self._nodes[nid].copy())
        for eid in sorted(self._edges):
            net._insert_edge(self._edges[eid].copy())
        net._next_node_id = self._next_node_id
        net._next_edge_id = self._next_edge_id
        return net

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Network):
            return NotImplemented
        return (
            self.config == other.config
            and self._layers == other._layers
            and self._nodes == other._nodes
            and self._edges == other._edges
        )

    __hash__ = None

    def __repr__(self) -> str:
        layers = ", ".join(str(layer) for layer in self.layers())
        return f"Network(layers=[{layers}], nodes={len(self._nodes)}, edges={len(self._edges)})"
