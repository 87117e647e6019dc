"""API tests package.

End-to-end tests for the recovery endpoints using TestClient.
Tests the complete request/response cycle including:
- Request validation
- Response formatting
- Error handling
- HTTP status codes

Note:
    API tests run a real RecoveryFlow over an in-memory store. Use
    integration tests for the SQL store.
"""
