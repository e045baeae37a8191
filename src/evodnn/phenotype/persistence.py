"""
evodnn Persistence Module

Save a Network to a file and load it back. The file holds a pickled dictionary
with the layer sizes and the genome; loading rebuilds the topology and restores
the weights, so a loaded network is equal to (and computes exactly the same
outputs as) the saved one.

Functions:
    save(network, path): Write a network to 'path'
    load(path):          Read a network from 'path'
"""

import pickle
from pathlib import Path

from evodnn.phenotype.network import Network

_FORMAT = "evodnn.network"
_VERSION = 1

def save(network: Network, path) -> None:
    """
    Save a network to a file.

    Parameters:
        network: the network to save
        path:    destination file path (str or Path)
    """
    payload = {"format"     : _FORMAT,
               "version"    : _VERSION,
               "layer_sizes": list(network.layer_sizes),
               "weights"    : network.flat_weights()}

    with open(Path(path), 'wb') as f:
        pickle.dump(payload, f)

def load(path) -> Network:
    """
    Load a network saved with 'save'.

    Parameters:
        path: source file path (str or Path)

    Returns:
        the restored network
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Network file '{path}' not found")

    with open(path, 'rb') as f:
        payload = pickle.load(f)

    if not isinstance(payload, dict) or payload.get("format") != _FORMAT:
        raise ValueError(f"'{path}' does not contain a saved network")
    if payload.get("version") != _VERSION:
        raise ValueError(f"Unsupported network file version {payload.get('version')} in '{path}'")

    network = Network(payload["layer_sizes"])
    network.put_flat_weights(payload["weights"])
    return network
