"""NiceGUI interface - thin presentation layer over the chat session store.

Responsibilities:
    - Transcript rendering with error and retry banner
    - PDF upload and attached document list
    - New chat and manual retry actions

Contains no business logic. All state changes go through ChatSessionStore.
"""
