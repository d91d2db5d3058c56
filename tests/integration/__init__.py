"""Integration tests for components working together.

Exercise the real FastAPI app through httpx's ASGITransport, with the
model provider replaced by an in-memory fake.
"""
