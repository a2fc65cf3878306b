"""Shared error code constants.

Codes are stable machine-readable identifiers carried on every
``ErrorDetail``. The HTTP layer maps categories to status codes; codes let
callers and logs tell apart failures that share one category.
"""

# Authentication
MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
INVALID_CREDENTIAL = "INVALID_CREDENTIAL"

# Validation
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
INVALID_JSON_BODY = "INVALID_JSON_BODY"
MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

# Policy / authorization
POLICY_VIOLATION = "POLICY_VIOLATION"
PERMISSION_DENIED = "PERMISSION_DENIED"

# Dependency / external platform
DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
ROLE_CHECK_FAILED = "ROLE_CHECK_FAILED"
UNLOCK_FAILED = "UNLOCK_FAILED"
AUDIT_WRITE_FAILED = "AUDIT_WRITE_FAILED"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
