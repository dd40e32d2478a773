"""spmgraph - Swift package dependency visualization tool.

Turns the targets and products declared by a Swift package into a Graphviz
dependency diagram.
"""

from .core.models import Direction, GraphConfig, OutputFormat
from .core.spmgraph import SpmGraph

__version__ = "0.1.0"
__all__ = ["Direction", "GraphConfig", "OutputFormat", "SpmGraph"]
