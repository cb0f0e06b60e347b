"""BMFS disk-image tools, a module packer and a simulated teaching kernel with its shell."""

__version__ = "0.1.0"