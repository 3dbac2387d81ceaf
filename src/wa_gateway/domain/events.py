"""Catalog of event names a session can subscribe its webhook to."""

EVENT_CATALOG: tuple[str, ...] = (
    # Messages
    "Message",
    "UndecryptableMessage",
    "Receipt",
    "MediaRetry",
    "MediaRetryError",
    # Groups
    "GroupInfo",
    "JoinedGroup",
    # Contacts and profiles
    "Contact",
    "Picture",
    "BusinessName",
    "PushName",
    "PushNameSetting",
    # Chat management
    "Archive",
    "Pin",
    "Mute",
    "Star",
    "DeleteChat",
    "ClearChat",
    "DeleteForMe",
    "MarkChatAsRead",
    # Blocklist
    "Blocklist",
    "BlocklistChange",
    # Labels
    "LabelAssociationChat",
    "LabelAssociationMessage",
    "LabelEdit",
    # Connection
    "Connected",
    "Disconnected",
    "ConnectFailure",
    "KeepAliveRestored",
    "KeepAliveTimeout",
    "LoggedOut",
    "ClientOutdated",
    "TemporaryBan",
    "StreamError",
    "StreamReplaced",
    # Pairing
    "PairSuccess",
    "PairError",
    "QR",
    "QRScannedWithoutMultidevice",
    # Settings
    "PrivacySettings",
    "UserAbout",
    "UnarchiveChatsSetting",
    "UserStatusMute",
    # Sync
    "AppState",
    "AppStateSyncComplete",
    "HistorySync",
    "OfflineSyncCompleted",
    "OfflineSyncPreview",
    # Calls
    "CallOffer",
    "CallAccept",
    "CallTerminate",
    "CallOfferNotice",
    "CallRelayLatency",
    "CallPreAccept",
    "CallReject",
    "CallTransport",
    "UnknownCallEvent",
    # Presence
    "Presence",
    "ChatPresence",
    # Security
    "IdentityChange",
    "CATRefreshError",
    # Newsletters
    "NewsletterJoin",
    "NewsletterLeave",
    "NewsletterMuteChange",
    "NewsletterLiveUpdate",
    "NewsletterMessageMeta",
    # Other platforms
    "FBMessage",
    # Special
    "ManualLoginReconnect",
    "All",
)


def is_known_event(name: str) -> bool:
    """Return True when the name is part of the catalog."""
    return name in EVENT_CATALOG
