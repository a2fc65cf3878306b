"""Canonical logging field names for structured log lines.

Keeping names in one place keeps the service, the adapter and the HTTP layer
emitting the same keys for the same facts.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Envelope/correlation fields.
TRACE_ID = "trace_id"
ENVELOPE_ID = "envelope_id"
SOURCE = "source"
PRINCIPAL = "principal"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"

# Admin action fields.
ACTOR_ID = "actor_id"
ACTOR_LABEL = "actor_label"
TARGET_USER_ID = "target_user_id"
ACTION_TYPE = "action_type"
STAGE = "stage"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
