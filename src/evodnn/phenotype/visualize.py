"""
evodnn Visualization Module

Render the topology of a Network with Graphviz. Neurons are drawn layer by layer,
left to right; every connection becomes an edge whose colour encodes its weight
relative to the other weights of the network (lowest green, middle yellow,
highest red) and whose thickness grows with the weight's magnitude.

Rendering only reads the network.

Functions:
    visualize(network, view): Build (and optionally display) a graphviz.Digraph
    weight_color(weight, min_weight, max_weight): Edge colour for a weight
"""

import math
from typing import TYPE_CHECKING

import graphviz  # type: ignore

if TYPE_CHECKING:
    from evodnn.phenotype.network import Network

def weight_color(weight: float, min_weight: float, max_weight: float) -> str:
    """
    Colour of an edge, on a green => yellow => red scale.

    Parameters:
        weight:     the weight to colour
        min_weight: the smallest weight in the network (pure green)
        max_weight: the largest weight in the network (pure red)

    Returns:
        the colour as an RGB hex string ('#rrggbb')
    """
    if not math.isfinite(weight):
        return '#808080'

    span = max_weight - min_weight
    p    = (weight - min_weight) / span if span > 0 else 0.5

    red   = 0xFF if p > 0.5 else int(0xFF * 2.0 * p)
    green = 0xFF if p < 0.5 else int(0xFF * (2.0 - 2.0 * p))
    return f"#{red:02x}{green:02x}00"

def _node_name(position: tuple[int, int]) -> str:
    return f"L{position[0]}N{position[1]}"

def visualize(network: 'Network', view: bool = True) -> graphviz.Digraph:
    """
    Visualize the network using Graphviz.

    Parameters:
        network: the network to render
        view:    If True, automatically open the visualization after rendering

    Returns:
        graphviz.Digraph object representing the network
    """
    dot = graphviz.Digraph()
    dot.attr(rankdir='LR')  # Left to right layout
    dot.attr('graph', labelloc='t', label=f"layers={list(network.layer_sizes)}")

    node_attrs = {
        'neuron': {'fillcolor': 'white'    , 'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5', 'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'},
        'bias':   {'fillcolor': 'lightgrey', 'color': 'black', 'style': 'filled', 'shape': 'square', 'penwidth': '0.5', 'fontsize': '5', 'width': '0.4', 'height': '0.4', 'fixedsize': 'true'},
    }

    last = len(network.layers) - 1
    for layer in network.layers:
        title = 'Inputs' if layer.index == 0 else 'Outputs' if layer.index == last else f'Hidden {layer.index}'
        with dot.subgraph(name=f'cluster_{layer.index}') as cluster:
            cluster.attr(rank='same', label=title, style='invisible')
            for neuron in layer.neurons:
                attrs = node_attrs['bias' if neuron.is_bias else 'neuron'].copy()
                attrs['label'] = 'bias' if neuron.is_bias else f"{neuron.position[0]}:{neuron.position[1]}"
                cluster.node(_node_name(neuron.position), **attrs)

    finite = [w for w in network.flat_weights() if math.isfinite(w)]
    min_weight = min(finite, default=0.0)
    max_weight = max(finite, default=0.0)

    for layer in network.layers:
        for neuron in layer.neurons:
            for conn in neuron.incoming:
                width = min(abs(conn.weight) * 2, 5) if math.isfinite(conn.weight) else 0.5
                dot.edge(_node_name(conn.source), _node_name(conn.destination),
                         color=weight_color(conn.weight, min_weight, max_weight),
                         penwidth=f"{max(width, 0.1):.2f}",
                         arrowsize='0.5',
                         tooltip=f"w={conn.weight:+.4f}")

    if view:
        dot.view(cleanup=True)

    return dot
