"""Test package for the PDF chat client.

Provides test coverage for all components with unit tests for isolated
logic and integration tests for the submission workflow.

Structure:
    - unit/: Individual function and class tests
    - integration/: Session workflow against a fake streaming endpoint

The remote service is simulated with httpx.MockTransport.
Leverages pytest with pytest-check for soft assertions.
"""
