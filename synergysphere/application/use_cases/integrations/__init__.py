"""Use cases for the GitHub and Google integrations."""

from .credentials import connect_provider, disconnect_provider, list_connected_providers
from .github import (
    WebhookSignatureError,
    handle_issue_event,
    import_issues,
    sign_payload,
    verify_signature,
)

__all__ = [
    "WebhookSignatureError",
    "connect_provider",
    "disconnect_provider",
    "handle_issue_event",
    "import_issues",
    "list_connected_providers",
    "sign_payload",
    "verify_signature",
]
