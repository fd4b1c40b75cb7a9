"""
Test Suite for Price Cache.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Cache + mock service + configuration together
    - performance/: Parallelism of batch lookups

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/performance/               # Parallelism checks
"""
