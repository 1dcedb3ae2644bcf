from __future__ import annotations
import re
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import Optional, Tuple


class LayerKind(IntEnum):
    INPUT = 0
    HIDDEN = 1
    OUTPUT = 2


@total_ordering
@dataclass(frozen=True)
class LayerID:
    """
    Identifies a layer of a network: the input layer, a numbered hidden
    layer, or the output layer.

    Layers are totally ordered:
    input < hidden(0) < hidden(1) < ... < output.
    Firing visits layers in this order and edges must point from a lower
    layer to a higher one.
    """
    kind: LayerKind
    index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind == LayerKind.HIDDEN:
            if isinstance(self.index, bool) or not isinstance(self.index, int) or self.index < 0:
                raise ValueError(f"Hidden layer index must be a non-negative integer, got {self.index!r}")
        elif self.index is not None:
            raise ValueError(f"{self.kind.name.lower()} layer does not take an index")

    @classmethod
    def input(cls) -> "LayerID":
        return cls(LayerKind.INPUT)

    @classmethod
    def hidden(cls, index: int) -> "LayerID":
        return cls(LayerKind.HIDDEN, index)

    @classmethod
    def output(cls) -> "LayerID":
        return cls(LayerKind.OUTPUT)

    @property
    def is_input(self) -> bool:
        return self.kind == LayerKind.INPUT

    @property
    def is_hidden(self) -> bool:
        return self.kind == LayerKind.HIDDEN

    @property
    def is_output(self) -> bool:
        return self.kind == LayerKind.OUTPUT

    def sort_key(self) -> Tuple[int, int]:
        return (int(self.kind), self.index if self.index is not None else 0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LayerID):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def to_text(self) -> str:
        """Compact text form: 'input', 'hidden:<index>' or 'output'."""
        if self.kind == LayerKind.HIDDEN:
            return f"hidden:{self.index}"
        return self.kind.name.lower()

    @classmethod
    def from_text(cls, text: str) -> "LayerID":
        if text == "input":
            return cls.input()
        if text == "output":
            return cls.output()
        if isinstance(text, str) and text.startswith("hidden:"):
            raw = text[len("hidden:"):]
            if re.fullmatch(r"0|[1-9][0-9]*", raw):
                return cls.hidden(int(raw))
        raise ValueError(f"Unknown layer identifier {text!r}")

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        if self.kind == LayerKind.HIDDEN:
            return f"LayerID.hidden({self.index})"
        return f"LayerID.{self.kind.name.lower()}()"


INPUT_LAYER = LayerID.input()
OUTPUT_LAYER = LayerID.output()
