"""
This script builds the small three-layer example network by hand,
fires it once, and saves it as a JSON snapshot for run_network.py.
"""
import argparse
import math

from ffnet import Network, Node, Edge, LayerID, save_network_json

def build() -> Network:
    net = Network.default()
    net.add_layer(LayerID.hidden(0))

    # --- 1. Nodes: one per layer ---
    i = Node.create(net, LayerID.input(), 0.3)
    h = Node.create(net, LayerID.hidden(0), 0.2)
    o = Node.create(net, LayerID.output(), 0.0)

    # --- 2. Edges, including a skip connection input -> output ---
    Edge.create(net, i, h, 1.3)
    Edge.create(net, h, o, 1.5)
    Edge.create(net, i, o, 2.0)
    return net

def main():
    parser = argparse.ArgumentParser(description="Build, fire and save the example network.")
    parser.add_argument(
        "--save",
        type=str,
        default="artifacts/example_network.json",
        help="Path to save the network JSON file."
    )
    args = parser.parse_args()

    net = build()
    net.set_inputs([0.8])
    net.fire()
    out = []
    net.read(out)

    expected = 1.0 / (1.0 + math.exp(-(0.8 * 1.3 - 0.2))) * 1.5 + 0.8 * 2.0
    print(f"Output: {out[0]:.6f} (by hand: {expected:.6f})")

    save_network_json(net, args.save, meta={"description": "three-layer example"})

if __name__ == "__main__":
    main()
