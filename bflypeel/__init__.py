"""Butterfly counting and peeling on bipartite graphs, with edge-list tools."""

__version__ = "0.1.0"