"""Turn-based vector racing on procedurally generated maze tracks."""

__version__ = "0.1.0"
