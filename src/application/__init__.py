"""Application Layer.

Orchestrates domain services and infrastructure adapters: settings,
generate-and-export, and the command-line entry point.
"""
