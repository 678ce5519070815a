"""Dependency graph model and loader."""

from src.depgraph.loader import GraphLoader, load_graph
from src.depgraph.models import Edge, Graph, Node, NodeRelationship, NodeRelationships

__all__ = [
    "Edge",
    "Graph",
    "GraphLoader",
    "Node",
    "NodeRelationship",
    "NodeRelationships",
    "load_graph",
]
