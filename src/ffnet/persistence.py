from __future__ import annotations
import json
import math
import os
from typing import Any, Dict, List, Optional

from .elements import Node, Edge
from .errors import (
    MalformedInputError,
    ReferentialIntegrityError,
    NodeNotFoundError,
    InvalidEdgeDirectionError,
    EdgeExistsError,
)
from .layer import LayerID, LayerKind
from .network import Network, NetworkConfig

FORMAT_VERSION = 1

def network_to_dict(network: Network) -> Dict:
    """Readable serialization of a network."""
    return {
        "format_version": FORMAT_VERSION,
        "config": {
            "activation": network.config.activation,
            "step_threshold": float(network.config.step_threshold),
        },
        "layers": [
            {
                "kind": layer.kind.name.lower(),
                "index": layer.index,
            }
            for layer in network.layers()
        ],
        "nodes": [
            {
                "id": n.id,
                "layer": n.layer.to_text(),
                "threshold": float(n.threshold),
                "value": None if n.value is None else float(n.value),
            }
            for n in network.nodes()
        ],
        "edges": [
            {
                "id": e.id,
                "source": e.source,
                "target": e.target,
                "weight": float(e.weight),
            }
            for e in network.edges()
        ],
    }

def network_to_json(network: Network) -> str:
    return json.dumps(network_to_dict(network), ensure_ascii=False, allow_nan=False, indent=2, sort_keys=True)

# =========================
# Decoding helpers
# =========================
def _field(record: Dict, key: str, where: str) -> Any:
    if not isinstance(record, dict):
        raise MalformedInputError(f"{where}: expected an object, got {type(record).__name__}")
    if key not in record:
        raise MalformedInputError(f"{where}: missing field {key!r}")
    return record[key]

def _int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(f"{where}: expected an integer, got {value!r}")
    return value

def _float(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedInputError(f"{where}: expected a number, got {value!r}")
    try:
        result = float(value)
    except OverflowError:
        raise MalformedInputError(f"{where}: number out of range") from None
    if not math.isfinite(result):
        raise MalformedInputError(f"{where}: expected a finite number, got {value!r}")
    return result

def _list(value: Any, where: str) -> List:
    if not isinstance(value, list):
        raise MalformedInputError(f"{where}: expected a list, got {type(value).__name__}")
    return value

def _layer(record: Dict, where: str) -> LayerID:
    kind = _field(record, "kind", where)
    index = _field(record, "index", where)
    try:
        return LayerID(LayerKind[str(kind).upper()], index)
    except (KeyError, ValueError) as e:
        raise MalformedInputError(f"{where}: invalid layer ({e})") from e

def network_from_dict(d: Dict) -> Network:
    """
    Reconstruct a Network from a serialized dict.

    Node and edge ids are preserved. Raises MalformedInputError for
    structurally invalid documents and ReferentialIntegrityError when a
    node or edge points at something the document does not declare.
    """
    version = _int(_field(d, "format_version", "document"), "format_version")
    if version != FORMAT_VERSION:
        raise MalformedInputError(f"Unsupported format_version {version!r}")

    cfg_raw = _field(d, "config", "document")
    config = NetworkConfig(
        activation=_field(cfg_raw, "activation", "config"),
        step_threshold=_float(_field(cfg_raw, "step_threshold", "config"), "config.step_threshold"),
    )
    if not isinstance(config.activation, str):
        raise MalformedInputError(f"config.activation: expected a string, got {config.activation!r}")
    try:
        network = Network.empty(config)
    except ValueError as e:
        raise MalformedInputError(f"config: {e}") from e

    for i, raw in enumerate(_list(_field(d, "layers", "document"), "layers")):
        layer = _layer(raw, f"layers[{i}]")
        if network.has_layer(layer):
            raise MalformedInputError(f"layers[{i}]: duplicate layer {layer}")
        network.add_layer(layer)

    nodes: Dict[int, Node] = {}
    for i, raw in enumerate(_list(_field(d, "nodes", "document"), "nodes")):
        where = f"nodes[{i}]"
        nid = _int(_field(raw, "id", where), f"{where}.id")
        layer_text = _field(raw, "layer", where)
        try:
            layer = LayerID.from_text(layer_text)
        except ValueError as e:
            raise MalformedInputError(f"{where}.layer: {e}") from e
        threshold = _float(_field(raw, "threshold", where), f"{where}.threshold")
        raw_value = _field(raw, "value", where)
        value = None if raw_value is None else _float(raw_value, f"{where}.value")
        if nid in nodes:
            raise MalformedInputError(f"{where}: duplicate node id {nid}")
        if not network.has_layer(layer):
            raise ReferentialIntegrityError(f"{where}: node {nid} references undeclared layer {layer}")
        if value is None and not layer.is_input:
            raise MalformedInputError(f"{where}: only input nodes may have a null value")
        nodes[nid] = Node(nid, layer, threshold, value)
    # Ids are allocated in creation order, so id order rebuilds layer membership.
    for nid in sorted(nodes):
        network._insert_node(nodes[nid])

    edges: Dict[int, Edge] = {}
    for i, raw in enumerate(_list(_field(d, "edges", "document"), "edges")):
        where = f"edges[{i}]"
        eid = _int(_field(raw, "id", where), f"{where}.id")
        if eid in edges:
            raise MalformedInputError(f"{where}: duplicate edge id {eid}")
        edges[eid] = Edge(
            eid,
            _int(_field(raw, "source", where), f"{where}.source"),
            _int(_field(raw, "target", where), f"{where}.target"),
            _float(_field(raw, "weight", where), f"{where}.weight"),
        )
    for eid in sorted(edges):
        edge = edges[eid]
        try:
            Edge.check(network, edge.source, edge.target)
        except NodeNotFoundError as e:
            raise ReferentialIntegrityError(f"edge {eid}: {e}") from e
        except (InvalidEdgeDirectionError, EdgeExistsError) as e:
            raise MalformedInputError(f"edge {eid}: {e}") from e
        network._insert_edge(edge)
    return network

def network_from_json(text: str) -> Network:
    try:
        d = json.loads(text)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Snapshot is not valid JSON: {e}") from e
    if not isinstance(d, dict):
        raise MalformedInputError("Snapshot must be a JSON object")
    return network_from_dict(d)

def save_network_json(network: Network, path: str, meta: Optional[Dict]=None) -> None:
    """Save network + optional metadata as readable JSON."""
    payload = {"network": network_to_dict(network), "meta": meta or {}}
    text = json.dumps(payload, ensure_ascii=False, allow_nan=False, indent=2, sort_keys=True)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    print(f"Saved network to {path}")

def load_network_json(path: str) -> Network:
    """Load network (ignoring unknown extra metadata)."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except ValueError as e:
            raise MalformedInputError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedInputError(f"{path} must hold a JSON object")
    data = payload.get("network", payload)
    return network_from_dict(data)
