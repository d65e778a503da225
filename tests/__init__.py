"""
Blog SDK Test Suite.

This package contains:
- unit/: Unit tests (mocked sub-clients, httpx.MockTransport, no servers)
- integration/: Both transports against the in-memory service in fake_blog.py
"""
