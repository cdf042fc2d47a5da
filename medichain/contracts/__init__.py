"""Bundled contract build artifacts (ABI and per-network addresses)."""
