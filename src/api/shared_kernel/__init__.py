"""Shared Kernel module.

Components every bounded context may depend on: the cache provider protocol
with its in-memory and Redis backends, and the observation context used by
domain probes. Nothing here imports from a bounded context.
"""
