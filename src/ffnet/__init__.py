"""
A small feedforward neural-network inference engine.
Build a layered graph of nodes and weighted edges, fire it on input values,
read the outputs, and save or restore the whole network as JSON.
No training is included: weights are evaluated, never learned.
"""
from .layer import LayerID, LayerKind, INPUT_LAYER, OUTPUT_LAYER
from .elements import Node, Edge
from .network import Network, NetworkConfig
from .activation import ACTIVATION_FUNCTIONS, resolve_activation
from .persistence import (
    network_to_dict,
    network_from_dict,
    save_network_json,
    load_network_json,
)
from .visualization import visualize_network
from .errors import (
    NetworkError,
    CreateNodeError,
    CreateEdgeError,
    InputError,
    FireError,
    ReadError,
    DeserializeError,
    LayerExistsError,
    LayerNotFoundError,
    NodeNotFoundError,
    EdgeNotFoundError,
    InvalidEdgeDirectionError,
    EdgeExistsError,
    DimensionMismatchError,
    NotAnInputNodeError,
    UninitializedInputError,
    NumericOverflowError,
    MalformedInputError,
    ReferentialIntegrityError,
)

__all__ = [
    "LayerID",
    "LayerKind",
    "INPUT_LAYER",
    "OUTPUT_LAYER",
    "Node",
    "Edge",
    "Network",
    "NetworkConfig",
    "ACTIVATION_FUNCTIONS",
    "resolve_activation",
    "network_to_dict",
    "network_from_dict",
    "save_network_json",
    "load_network_json",
    "visualize_network",
    "NetworkError",
    "CreateNodeError",
    "CreateEdgeError",
    "InputError",
    "FireError",
    "ReadError",
    "DeserializeError",
    "LayerExistsError",
    "LayerNotFoundError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "InvalidEdgeDirectionError",
    "EdgeExistsError",
    "DimensionMismatchError",
    "NotAnInputNodeError",
    "UninitializedInputError",
    "NumericOverflowError",
    "MalformedInputError",
    "ReferentialIntegrityError",
]
