"""Unit tests for individual components in isolation.

Coverage:
    - chat/: Stream decoding, session state and the chat controller
    - storage/: Conversation persistence
    - gateway/ and models/: Configuration, modes and request building
    - ui/: Pure rendering helpers
"""
