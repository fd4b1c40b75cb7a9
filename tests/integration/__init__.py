"""
Integration Tests - Cache, Service and Configuration Together.

Test Files:
    - test_cache_from_config.py: Caches built from YAML configuration
"""
