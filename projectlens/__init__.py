"""Project discovery for multi-cluster role bindings."""

__version__ = "0.1.0"
