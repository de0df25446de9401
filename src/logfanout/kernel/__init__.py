"""Kernel – event model, priority heap, storage port, errors and time."""
