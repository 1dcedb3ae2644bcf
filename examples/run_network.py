"""
This script demonstrates how to load a saved network
from a JSON file and use it for inference.
"""
import argparse
import os

from ffnet import load_network_json, visualize_network

def main():
    parser = argparse.ArgumentParser(
        description="Load a network snapshot and run it on input values."
    )
    parser.add_argument(
        "network_file",
        type=str,
        help="Path to the network JSON file.",
        nargs='?',
        default="artifacts/example_network.json"
    )
    parser.add_argument(
        "--inputs",
        type=float,
        nargs="+",
        default=[0.0, 0.4, 0.8, 1.2],
        help="Values to feed, one per run (single-input networks)."
    )
    parser.add_argument(
        "--viz",
        type=str,
        default=None,
        help="Optional path to save a picture of the network."
    )
    args = parser.parse_args()

    if not os.path.exists(args.network_file):
        print(f"Error: Network file not found at '{args.network_file}'")
        print("Please run 'python examples/build_example.py' first to generate it.")
        return

    # --- 1. Load the network ---
    print(f"Loading network from: {args.network_file}")
    net = load_network_json(args.network_file)
    print(f"Loaded {net!r}")

    # --- 2. Run inference ---
    print("\nRunning inference:")
    for x in args.inputs:
        pred = net.forward([x])
        print(f"  Input: {x:.3f} -> Output: {', '.join(f'{y:.4f}' for y in pred)}")

    if args.viz:
        visualize_network(net, args.viz, title=f"{os.path.basename(args.network_file)} (last input {args.inputs[-1]})")

if __name__ == "__main__":
    main()
