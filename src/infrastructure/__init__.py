"""Infrastructure Layer.

Adapters that perform I/O or touch external libraries on behalf of the
domain ports.
"""
