from helpdesk.audit.labels import format_action


def test_auth_actions():
    assert format_action("auth.login", "User", "u1") == "Logged in to the system"
    assert format_action("auth.logout", "User", None) == "Logged out of the system"
    assert format_action("auth.register", "User", "u1") == "Registered a new account"


def test_ticket_actions_include_id():
    assert format_action("ticket.create", "Ticket", "42") == "Created ticket #42"
    assert format_action("ticket.close", "Ticket", "7") == "Closed ticket #7"
    assert format_action("ticket.update", "Ticket", "7") == "Updated ticket #7"
    assert format_action("ticket.delete", "Ticket", "7") == "Deleted ticket #7"


def test_ticket_action_without_id():
    assert format_action("ticket.create", "Ticket", None) == "Created ticket"


def test_unknown_action_fallback():
    assert format_action("comment.add", "Comment", "9") == "comment.add — Comment #9"
    assert format_action("export.run", "Report", None) == "export.run — Report"
