"""Integration tests for components working together as a system.

Runs SessionController with the real store, composer, decoder and
transport; only the remote service is replaced by httpx.MockTransport.

Coverage:
    - Full submission from validation to streamed reply
    - History replay across submissions
    - Document attachments, extraction failures and transport failures
    - Single in-flight submission and teardown
"""
