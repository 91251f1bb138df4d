"""Identity domain layer: aggregates and value objects.

The domain layer has no dependency on infrastructure or frameworks.
"""
