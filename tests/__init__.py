"""Test package for the Achaar chat application.

Structure:
    - unit/: Provider adapter, PDF extraction, session state and store
    - integration/: HTTP endpoints and store-to-API flows through ASGITransport

No test talks to the real model provider; a fake provider is injected
through FastAPI dependency overrides.
"""
