"""Readable labels for audit actions."""

ACTION_LABELS = {
    "auth.login": "Logged in to the system",
    "auth.logout": "Logged out of the system",
    "auth.register": "Registered a new account",
    "ticket.create": "Created ticket",
    "ticket.update": "Updated ticket",
    "ticket.close": "Closed ticket",
    "ticket.delete": "Deleted ticket",
}

# Labels that refer to a specific resource get " #<id>" appended
_RESOURCE_LABELS = {"ticket.create", "ticket.update", "ticket.close", "ticket.delete"}


def format_action(action: str, resource_type: str, resource_id: str | None) -> str:
    """Convert a raw action like ``ticket.create`` into a sentence."""
    suffix = f" #{resource_id}" if resource_id else ""

    label = ACTION_LABELS.get(action)
    if label is None:
        return f"{action} — {resource_type}{suffix}"
    if action in _RESOURCE_LABELS:
        return f"{label}{suffix}"
    return label
