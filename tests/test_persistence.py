from __future__ import annotations

import json
import math

import pytest

from ffnet import (
    DeserializeError,
    LayerID,
    MalformedInputError,
    Network,
    NetworkConfig,
    ReferentialIntegrityError,
    load_network_json,
    network_from_dict,
    network_to_dict,
    save_network_json,
)


def test_round_trip_structural_equality(wide_network: Network) -> None:
    restored = Network.deserialize(wide_network.serialize())
    assert restored == wide_network
    assert restored.layers() == wide_network.layers()
    assert restored.edges() == wide_network.edges()


def test_round_trip_text_is_stable(example_network: Network) -> None:
    example_network.set_inputs([0.8])
    example_network.fire()
    text = example_network.serialize()
    assert Network.deserialize(text).serialize() == text
    assert example_network.serialize() == text


def test_round_trip_preserves_values_and_outputs(example_network: Network) -> None:
    example_network.set_inputs([0.8])
    example_network.fire()
    restored = Network.deserialize(example_network.serialize())
    assert restored.get_outputs() == example_network.get_outputs()
    assert restored.get_node(1).value == 0.8
    restored.fire()
    assert restored.get_outputs() == example_network.get_outputs()


def test_round_trip_keeps_unset_inputs(example_network: Network) -> None:
    restored = Network.deserialize(example_network.serialize())
    assert restored.get_node(1).value is None
    assert not restored.inputs_ready


def test_round_trip_empty_networks() -> None:
    for net in (Network.empty(), Network.default()):
        assert Network.deserialize(net.serialize()) == net


def test_round_trip_config() -> None:
    net = Network.default(NetworkConfig(activation="step", step_threshold=0.25))
    restored = Network.deserialize(net.serialize())
    assert restored.config == NetworkConfig("step", 0.25)


def test_document_layout(example_network: Network) -> None:
    doc = json.loads(example_network.serialize())
    assert doc["format_version"] == 1
    assert doc["config"] == {"activation": "sigmoid", "step_threshold": 0.0}
    assert doc["layers"] == [
        {"kind": "input", "index": None},
        {"kind": "hidden", "index": 0},
        {"kind": "output", "index": None},
    ]
    assert doc["nodes"][1] == {"id": 2, "layer": "hidden:0", "threshold": 0.2, "value": 0.0}
    assert doc["edges"][2] == {"id": 3, "source": 1, "target": 3, "weight": 2.0}


def test_ids_are_preserved_and_counters_resume() -> None:
    doc = network_to_dict(Network.default())
    doc["nodes"] = [
        {"id": 40, "layer": "output", "threshold": 0.0, "value": 0.0},
        {"id": 7, "layer": "input", "threshold": 0.0, "value": None},
    ]
    doc["edges"] = [{"id": 11, "source": 7, "target": 40, "weight": -2.0}]
    net = network_from_dict(doc)
    assert [n.id for n in net.nodes()] == [7, 40]
    assert net.get_edge(11).weight == -2.0
    assert net.add_node(LayerID.output()) == 41
    assert net.add_edge(7, 41, 1.0) == 12
    assert net.forward([1.5]) == [-3.0, 1.5]


def test_float_weights_round_trip_exactly() -> None:
    net = Network.default()
    i = net.add_node(LayerID.input(), 1.0 / 3.0)
    o = net.add_node(LayerID.output())
    net.add_edge(i, o, math.pi * 1e-7)
    restored = Network.deserialize(net.serialize())
    assert restored.get_edge(1).weight == math.pi * 1e-7
    assert restored.get_node(i).threshold == 1.0 / 3.0


@pytest.mark.parametrize("text", ["", "not json", "[1, 2, 3]", "null", '"network"'])
def test_malformed_text(text: str) -> None:
    with pytest.raises(MalformedInputError):
        Network.deserialize(text)


def _doc(net: Network) -> dict:
    return json.loads(net.serialize())


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.pop("nodes"),
        lambda d: d.pop("config"),
        lambda d: d.update(format_version=2),
        lambda d: d.update(layers="input"),
        lambda d: d["config"].update(activation="swish"),
        lambda d: d["config"].update(activation=3),
        lambda d: d["layers"].append({"kind": "input", "index": None}),
        lambda d: d["layers"].append({"kind": "middle", "index": None}),
        lambda d: d["layers"].append({"kind": "hidden", "index": -1}),
        lambda d: d["nodes"][0].update(id="1"),
        lambda d: d["nodes"][0].update(threshold="high"),
        lambda d: d["nodes"][0].update(layer="hidden:x"),
        lambda d: d["nodes"][1].update(value=None),
        lambda d: d["nodes"].append(dict(d["nodes"][0])),
        lambda d: d["edges"][0].pop("weight"),
        lambda d: d["edges"][0].update(weight=True),
        lambda d: d["edges"].append(dict(d["edges"][0])),
        lambda d: d["edges"].append({"id": 9, "source": 3, "target": 1, "weight": 1.0}),
        lambda d: d["edges"].append({"id": 9, "source": 1, "target": 2, "weight": 1.0}),
        lambda d: d["nodes"][1].update(threshold=10 ** 400),
        lambda d: d["edges"][0].update(weight=float("inf")),
        lambda d: d["nodes"][2].update(value=float("nan")),
        lambda d: d["config"].update(step_threshold=-(10 ** 400)),
        lambda d: d.update(format_version=True),
        lambda d: d.update(format_version=1.0),
    ],
)
def test_malformed_documents(example_network: Network, mutate) -> None:
    doc = _doc(example_network)
    mutate(doc)
    with pytest.raises(MalformedInputError) as info:
        Network.deserialize(json.dumps(doc))
    assert isinstance(info.value, DeserializeError)


def test_edge_to_missing_node(example_network: Network) -> None:
    doc = _doc(example_network)
    doc["edges"].append({"id": 4, "source": 1, "target": 99, "weight": 0.5})
    with pytest.raises(ReferentialIntegrityError):
        Network.deserialize(json.dumps(doc))


def test_node_in_undeclared_layer(example_network: Network) -> None:
    doc = _doc(example_network)
    doc["layers"] = [layer for layer in doc["layers"] if layer["kind"] != "hidden"]
    with pytest.raises(ReferentialIntegrityError):
        Network.deserialize(json.dumps(doc))


def test_save_and_load(tmp_path, example_network: Network, capsys) -> None:
    path = tmp_path / "nested" / "net.json"
    save_network_json(example_network, str(path), meta={"note": "documented example"})
    assert "Saved network to" in capsys.readouterr().out
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["meta"] == {"note": "documented example"}
    assert load_network_json(str(path)) == example_network


def test_load_bare_snapshot(tmp_path, wide_network: Network) -> None:
    path = tmp_path / "bare.json"
    path.write_text(wide_network.serialize(), encoding="utf-8")
    assert load_network_json(str(path)) == wide_network


def test_load_invalid_file(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(MalformedInputError):
        load_network_json(str(path))


def test_snapshot_is_strict_json(example_network: Network) -> None:
    example_network.forward([0.8])
    text = example_network.serialize()

    def reject(token: str) -> float:
        raise AssertionError(f"non-standard token {token}")

    assert json.loads(text, parse_constant=reject)["format_version"] == 1
    assert Network.deserialize(text) == example_network


def test_save_refuses_non_finite_metadata(tmp_path, example_network: Network) -> None:
    path = tmp_path / "net.json"
    with pytest.raises(ValueError):
        save_network_json(example_network, str(path), meta={"loss": float("nan")})
    assert not path.exists()
