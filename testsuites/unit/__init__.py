"""Unit tests running against in-memory Playwright fakes."""
