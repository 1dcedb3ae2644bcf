"""Shared fixtures: the small three-layer example network used across tests."""
from __future__ import annotations

import matplotlib
import pytest

matplotlib.use("Agg")

from ffnet import Edge, LayerID, Network, Node


@pytest.fixture()
def example_network() -> Network:
    """input(0.3) -> hidden(0.2) -> output, plus a skip edge input -> output."""
    net = Network.default()
    net.add_layer(LayerID.hidden(0))
    i = Node.create(net, LayerID.input(), 0.3)
    h = Node.create(net, LayerID.hidden(0), 0.2)
    o = Node.create(net, LayerID.output(), 0.0)
    Edge.create(net, i, h, 1.3)
    Edge.create(net, h, o, 1.5)
    Edge.create(net, i, o, 2.0)
    return net


@pytest.fixture()
def wide_network() -> Network:
    """Two inputs, two hidden layers and two outputs with mixed weights."""
    net = Network.default()
    net.add_layer(LayerID.hidden(1))
    net.add_layer(LayerID.hidden(0))
    a = net.add_node(LayerID.input())
    b = net.add_node(LayerID.input())
    h0 = net.add_node(LayerID.hidden(0), 0.1)
    h1 = net.add_node(LayerID.hidden(0), -0.4)
    g = net.add_node(LayerID.hidden(1), 0.25)
    y0 = net.add_node(LayerID.output(), 5.0)
    y1 = net.add_node(LayerID.output())
    net.add_edge(a, h0, 0.7)
    net.add_edge(b, h0, -1.1)
    net.add_edge(a, h1, 0.3)
    net.add_edge(h0, g, 2.0)
    net.add_edge(h1, g, -0.5)
    net.add_edge(g, y0, 1.25)
    net.add_edge(h1, y1, 0.9)
    net.add_edge(b, y1, -0.2)
    return net
