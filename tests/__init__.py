"""
MediChain Connectivity Test Suite
=================================

Test organization:
- tests/unit/          - Unit tests (no node, no IPFS daemon)

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=medichain          # With coverage
"""
