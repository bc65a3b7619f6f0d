"""inbox-assistant: inbox triage, recruiter log and calendar tools over Google APIs.

Heavy imports are deferred. Use explicit imports:
    from inbox_assistant.auth import CredentialStore
    from inbox_assistant.tools import AssistantTools, register_tools
"""

# Light imports only (no external deps)
from inbox_assistant.config import AccountConfig, AppConfig, VALID_ACCOUNTS, load_config
from inbox_assistant.exceptions import InboxAssistantError


def __getattr__(name):
    """Lazy imports for classes that require the Google client libraries."""
    if name == "CredentialStore":
        from inbox_assistant.auth import CredentialStore
        return CredentialStore
    if name == "AssistantTools":
        from inbox_assistant.tools import AssistantTools
        return AssistantTools
    if name == "register_tools":
        from inbox_assistant.tools import register_tools
        return register_tools
    if name == "create_server":
        from inbox_assistant.server import create_server
        return create_server
    raise AttributeError(f"module 'inbox_assistant' has no attribute {name!r}")


__all__ = [
    "AccountConfig",
    "AppConfig",
    "AssistantTools",
    "CredentialStore",
    "InboxAssistantError",
    "VALID_ACCOUNTS",
    "create_server",
    "load_config",
    "register_tools",
]
