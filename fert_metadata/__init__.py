"""Fertilizer metadata generator: subgraph + BPF in, static artifacts out."""

__version__ = "0.1.0"
