"""Terminal behaviors for each node variant."""

from wayfarer.presentation.cli.nodes.base import BaseNode, NodeContext
from wayfarer.presentation.cli.nodes.dispatcher import NODE_BEHAVIORS, CliNodeDispatcher

__all__ = ["BaseNode", "CliNodeDispatcher", "NODE_BEHAVIORS", "NodeContext"]
