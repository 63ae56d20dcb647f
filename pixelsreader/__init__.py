"""Column vectors, row batches, column-chunk readers and bit-packing helpers for the Pixels storage format."""

__version__ = "0.1.0"