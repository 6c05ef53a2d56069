"""Test package for YUNO.

Structure:
    - unit/: Decoder, controller, store, config and schema tests
    - integration/: API endpoints through the real FastAPI app

External services are never contacted: the chat endpoint and the LLM gateway
are simulated with httpx.MockTransport, and storage uses in-memory SQLite.
"""
