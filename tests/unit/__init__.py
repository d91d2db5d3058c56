"""Unit tests for individual components in isolation.

Coverage:
    - provider/: failure classification, reply normalization, request assembly
    - parsing/: PDF text extraction
    - session/: state helpers, API client error kinds, store retry policy
"""
