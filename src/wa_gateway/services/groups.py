"""Group listing, lookup and membership management."""

import logging
from dataclasses import dataclass
from typing import Protocol

from wa_gateway.domain.errors import OperationError, ValidationError
from wa_gateway.domain.groups import GroupRecord
from wa_gateway.domain.jids import is_group_jid
from wa_gateway.services.sessions import SessionRepository

logger = logging.getLogger(__name__)

PARTICIPANT_ACTIONS = ("add", "remove")
MAX_PARTICIPANTS_PER_UPDATE = 50


class GroupManager(Protocol):
    """Group operations offered by the protocol bridge."""

    async def list_groups(self, session_id: str) -> list[GroupRecord]:
        """Return groups the session participates in."""

    async def get_group_info(self, session_id: str, group_jid: str) -> GroupRecord:
        """Return metadata for one group."""

    async def join_group(self, session_id: str, invite_link: str) -> GroupRecord:
        """Join a group by invite link and return its metadata."""

    async def leave_group(self, session_id: str, group_jid: str) -> None:
        """Leave a group."""

    async def update_participants(
        self, session_id: str, group_jid: str, action: str, participants: list[str]
    ) -> None:
        """Add or remove participants."""


@dataclass(frozen=True)
class ListGroupsRequest:
    session_id: str


@dataclass(frozen=True)
class UpdateParticipantsRequest:
    session_id: str
    group_jid: str
    action: str
    participants: list[str]


@dataclass(frozen=True)
class GroupView:
    jid: str
    name: str
    description: str
    participants: list[str]
    admins: list[str]
    owner: str
    is_announce: bool
    is_locked: bool
    created_at: str


@dataclass(frozen=True)
class GroupList:
    session_id: str
    groups: list[GroupView]
    count: int


@dataclass(frozen=True)
class ParticipantsUpdate:
    session_id: str
    group_jid: str
    action: str
    participants: list[str]
    count: int


def _to_view(record: GroupRecord) -> GroupView:
    return GroupView(
        jid=record.jid,
        name=record.name,
        description=record.description,
        participants=list(record.participants),
        admins=list(record.admins),
        owner=record.owner,
        is_announce=record.is_announce,
        is_locked=record.is_locked,
        created_at=str(record.created_at),
    )


def _require_group_jid(group_jid: str) -> str:
    group_jid = group_jid.strip()
    if not group_jid:
        raise ValidationError("group_jid", "group JID is required")
    if not is_group_jid(group_jid):
        raise ValidationError("group_jid", f"not a group JID: {group_jid}")
    return group_jid


@dataclass
class GroupService:
    """Shapes group data from the bridge into response views."""

    repository: SessionRepository
    group_manager: GroupManager

    async def list_groups(self, request: ListGroupsRequest) -> GroupList:
        """Return every group for the session."""
        try:
            records = await self.group_manager.list_groups(request.session_id)
        except Exception as exc:
            raise OperationError("list groups", exc) from exc
        groups = [_to_view(record) for record in records]
        return GroupList(session_id=request.session_id, groups=groups, count=len(groups))

    async def get_group_info(self, session_id: str, group_jid: str) -> GroupView:
        """Return a single group's metadata."""
        group_jid = _require_group_jid(group_jid)
        try:
            record = await self.group_manager.get_group_info(session_id, group_jid)
        except Exception as exc:
            raise OperationError("get group info", exc) from exc
        return _to_view(record)

    async def join_group(self, session_id: str, invite_link: str) -> GroupView:
        invite_link = invite_link.strip()
        if not invite_link:
            raise ValidationError("invite_link", "invite link is required")
        try:
            record = await self.group_manager.join_group(session_id, invite_link)
        except Exception as exc:
            raise OperationError("join group", exc) from exc
        logger.info("Joined group", extra={"session_id": session_id, "group_jid": record.jid})
        return _to_view(record)

    async def leave_group(self, session_id: str, group_jid: str) -> None:
        group_jid = _require_group_jid(group_jid)
        try:
            await self.group_manager.leave_group(session_id, group_jid)
        except Exception as exc:
            raise OperationError("leave group", exc) from exc
        logger.info("Left group", extra={"session_id": session_id, "group_jid": group_jid})

    async def update_participants(
        self, request: UpdateParticipantsRequest
    ) -> ParticipantsUpdate:
        """Add or remove up to 50 participants in one call."""
        group_jid = _require_group_jid(request.group_jid)
        if request.action not in PARTICIPANT_ACTIONS:
            raise ValidationError("action", "action must be 'add' or 'remove'")
        if not request.participants:
            raise ValidationError("participants", "at least one participant is required")
        if len(request.participants) > MAX_PARTICIPANTS_PER_UPDATE:
            raise ValidationError(
                "participants",
                f"maximum {MAX_PARTICIPANTS_PER_UPDATE} participants allowed per operation",
            )
        for index, participant in enumerate(request.participants):
            if not participant.strip():
                raise ValidationError(
                    "participants", f"participant {index} cannot be empty"
                )

        try:
            await self.group_manager.update_participants(
                request.session_id, group_jid, request.action, list(request.participants)
            )
        except Exception as exc:
            raise OperationError("update group participants", exc) from exc
        return ParticipantsUpdate(
            session_id=request.session_id,
            group_jid=group_jid,
            action=request.action,
            participants=list(request.participants),
            count=len(request.participants),
        )
