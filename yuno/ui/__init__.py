"""NiceGUI interface - thin presentation layer for YUNO.

Responsibilities:
    - Mode picker for the five conversation personas
    - Chat transcript with streaming assistant replies
    - Text input with optional image attachment
    - Conversation history sidebar (resume and delete)

Business logic lives in yuno.chat; this package only renders session state
and forwards user actions to the ChatController.
"""
