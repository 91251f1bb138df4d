"""Application layer of the identity bounded context.

Application services orchestrate aggregates, repositories and the aggregate
cache to fulfill use cases. They are the only owners of cross-entity
consistency rules.
"""
