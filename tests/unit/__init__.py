"""
Unit Tests - Testing Individual Components in Isolation.

Test Files:
    - test_price_store.py: Store freshness, snapshots, statistics
    - test_transparent_cache.py: Single-item read-through path
    - test_batch_lookup.py: Concurrent batch lookups and fail-fast
    - test_lookup_timeout.py: Bounded service calls
    - test_config_loader.py: Configuration loading/validation
    - test_mock_service.py: Fake price service behavior
    - test_metrics_collector.py: In-memory counters and timings
    - test_logging.py: Logging setup and log output
"""
