"""WhatsApp JID helpers."""

USER_SERVER = "s.whatsapp.net"
GROUP_SERVER = "g.us"
NEWSLETTER_SERVER = "newsletter"


def to_chat_jid(phone: str) -> str:
    """Return a chat JID for a bare phone number; full JIDs pass through."""
    if "@" in phone:
        return phone
    return f"{phone}@{USER_SERVER}"


def to_newsletter_jid(value: str) -> str:
    """Return a newsletter JID for a bare channel id; full JIDs pass through."""
    if "@" in value:
        return value
    return f"{value}@{NEWSLETTER_SERVER}"


def is_group_jid(jid: str) -> bool:
    """Return True when the JID addresses a group."""
    return jid.endswith(f"@{GROUP_SERVER}")
