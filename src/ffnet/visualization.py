from __future__ import annotations
import os
import math
from typing import Dict, Optional, Tuple

import matplotlib.pyplot as plt
import matplotlib as mpl
from matplotlib.colors import TwoSlopeNorm
from matplotlib.lines import Line2D

from .layer import LayerID
from .network import Network

# Fill colour for hidden nodes, keyed by the network's activation
ACT_COLORS_LIGHT = {
    "tanh":       "#4C78A8",  # steel blue
    "sigmoid":    "#59A14F",  # green
    "relu":       "#E45756",  # red/salmon
    "leaky_relu": "#F28E2B",  # orange
    "identity":   "#8E8E8E",  # gray
    "step":       "#B279A2",  # purple
}
ACT_COLORS_DARK = {
    "tanh":       "#6FA8DC",
    "sigmoid":    "#93C47D",
    "relu":       "#EA9999",
    "leaky_relu": "#F6B26B",
    "identity":   "#A6A6A6",
    "step":       "#C9A0DC",
}

def layout_positions(network: Network) -> Dict[int, Tuple[float, float]]:
    """
    Places each layer in its own column, left to right in firing order,
    and spreads a layer's nodes vertically in creation order.
    """
    layers = network.layers()
    n_cols = len(layers)
    pos: Dict[int, Tuple[float, float]] = {}
    for col, layer in enumerate(layers):
        members = network.layer_nodes(layer)
        n = len(members)
        x = 0.5 if n_cols == 1 else 0.06 + 0.88 * (col / (n_cols - 1))
        for i, nid in enumerate(members):
            y = 0.5 if n == 1 else 0.9 - 0.8 * (i / (n - 1))
            pos[nid] = (x, y)
    return pos

def _marker(layer: LayerID) -> str:
    if layer.is_input:
        return "s"
    if layer.is_output:
        return "D"
    return "o"

def _format_value(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.2f}"

def visualize_network(
    network: Network,
    filename: str,
    title: Optional[str] = None,
    figsize=(9, 6),
    show_weights: bool = True,
    show_values: bool = True,
    theme: str = "light",
    dpi: int = 180,
    weight_fmt: str = "{:+.2f}",
) -> None:
    """
    Draw a network to an image file.
    - One column per layer, in firing order.
    - Marker shape encodes the layer kind (input/hidden/output).
    - Edge colour and width encode the weight's sign and magnitude.
    - Node labels show the id and, optionally, the current value.
    """
    os.makedirs(os.path.dirname(filename) or ".", exist_ok=True)
    is_dark = (theme or "light").lower().startswith("d")
    bg = "#111111" if is_dark else "white"
    fg = "white" if is_dark else "black"
    label_bg = (1, 1, 1, 0.85) if not is_dark else (0.05, 0.05, 0.05, 0.85)
    label_edge = (0, 0, 0, 0.25) if not is_dark else (1, 1, 1, 0.25)
    act_color = ACT_COLORS_DARK if is_dark else ACT_COLORS_LIGHT

    pos = layout_positions(network)
    nodes = network.nodes()
    edges = network.edges()

    # ----- edge weight colormap -----
    weights = [e.weight for e in edges]
    max_abs = max((abs(w) for w in weights if math.isfinite(w)), default=0.0)
    if max_abs == 0:
        max_abs = 1.0
    norm = TwoSlopeNorm(vmin=-max_abs, vcenter=0.0, vmax=max_abs)
    cmap = plt.get_cmap("coolwarm")

    # ----- figure -----
    fig, ax = plt.subplots(figsize=figsize)
    try:
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.set_axis_off()
        ax.set_xlim(0, 1)
        ax.set_ylim(0, 1)
        ax.set_aspect("equal", adjustable="box")

        for e in edges:
            x1, y1 = pos[e.source]; x2, y2 = pos[e.target]
            color = cmap(norm(e.weight))
            lw = 1.0 + 2.5 * min(1.0, abs(e.weight) / max_abs)
            ax.plot([x1, x2], [y1, y2], color=color, linewidth=lw, alpha=0.95, zorder=2)

            if show_weights:
                mx, my = (x1 + x2) / 2.0, (y1 + y2) / 2.0
                dx, dy = (x2 - x1), (y2 - y1)
                L = math.hypot(dx, dy) + 1e-12
                nx, ny = (-dy / L, dx / L)
                off = 0.02
                ax.text(mx + off * nx, my + off * ny, weight_fmt.format(e.weight),
                        fontsize=8, ha="center", va="center", color=fg, zorder=4,
                        bbox=dict(boxstyle="round,pad=0.2", fc=label_bg, ec=label_edge))

        for node in nodes:
            x, y = pos[node.id]
            if node.layer.is_input:
                face = "tab:blue"
            elif node.layer.is_output:
                face = "tab:orange"
            else:
                face = act_color.get(network.config.activation, "#CCCCCC")
            ax.scatter([x], [y], s=420, c=face, marker=_marker(node.layer),
                       edgecolors=fg, lw=1.2, zorder=3)
            label = f"{node.id}\n{_format_value(node.value)}" if show_values else f"{node.id}"
            ax.text(x, y, label, fontsize=7, linespacing=0.9,
                    ha="center", va="center", color=fg, zorder=5)

        type_handles = [
            Line2D([0], [0], marker=_marker(layer), color='none',
                   markerfacecolor="none", markeredgecolor=fg, markersize=10, lw=0, label=label)
            for layer, label in (
                (LayerID.input(), "Input"),
                (LayerID.hidden(0), f"Hidden ({network.config.activation})"),
                (LayerID.output(), "Output"),
            )
        ]
        leg = ax.legend(handles=type_handles, title="Layers", loc="upper right", frameon=True)
        if leg:
            leg.get_frame().set_alpha(0.85)
            leg.get_frame().set_facecolor(label_bg)
            for txt in leg.get_texts():
                txt.set_color(fg)
            leg.get_title().set_color(fg)

        sm = mpl.cm.ScalarMappable(cmap=cmap, norm=norm)
        sm.set_array([])
        cbar = fig.colorbar(sm, ax=ax, fraction=0.05, pad=0.04)
        cbar.set_label("Edge weight", color=fg)
        cbar.ax.yaxis.set_tick_params(color=fg)
        plt.setp(plt.getp(cbar.ax.axes, "yticklabels"), color=fg)

        if title:
            ax.set_title(title, color=fg)

        fig.tight_layout()
        try:
            fig.savefig(filename, dpi=dpi, bbox_inches="tight", facecolor=bg)
        except Exception as e:
            print(f"[viz] Failed to save {filename}: {e}")
            raise
        print(f"[viz] Saved {filename}")
    finally:
        plt.close(fig)
