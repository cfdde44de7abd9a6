"""Core interfaces (Protocol).

The core depends on these abstractions; adapters provide the concrete
implementations.
"""
