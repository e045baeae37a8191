"""
evodnn Progress Module

Events reported by the trainer whenever it finds a new best network.

Classes:
    ProgressEvent: The new best network, its error and the epoch it was found in

Types:
    ProgressListener: Callable receiving ProgressEvent(s)
"""

from dataclasses import dataclass
from typing      import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from evodnn.phenotype import Network

@dataclass(frozen=True, eq=False)
class ProgressEvent:
    """
    Public Attributes:
        network: the new best network
        error:   its error over the training data
        epoch:   the epoch (0-based) in which it became the best network
    """
    network: 'Network'
    error  : float
    epoch  : int

    def __str__(self):
        return f"epoch={self.epoch:05d}, error={self.error:.6f}"

ProgressListener = Callable[[ProgressEvent], None]
