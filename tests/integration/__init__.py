"""Integration tests for components working together.

Coverage:
    - Chat proxy relay and upstream error translation
    - Conversation history endpoints
    - Chat controller streaming through the proxy app
"""
