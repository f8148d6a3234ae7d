"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - chat/: Store, composer, decoder and configuration
    - parsing/: Page-by-page text extraction and validation

Uses mocks for pypdf where text-bearing documents are needed. Follows single
responsibility per test function. Leverages pytest-check for multiple
assertions per test.
"""
