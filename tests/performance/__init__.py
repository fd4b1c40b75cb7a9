"""
Performance Tests.

Checks that batch lookups actually run in parallel:
    - 20 slow lookups finish in roughly the time of one
    - Warm batches never reach the service
"""
