from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_USER_ROLE = "agent"
DEFAULT_QUERY_STATUS = "pending"
DEFAULT_MESSAGE_STATUS = "sent"

QUERY_ASSIGNMENT_FIELDS = ("assignedTo", "assignedBy", "assignedAt", "resolvedAt")


def is_unset(data: Mapping[str, Any], field: str) -> bool:
    """
    True when a field should receive its default.

    Absent keys, None, empty strings, boolean False, numeric zero and NaN
    count as unset. Mappings and lists are real values even when empty.
    """
    if field not in data:
        return True
    value = data[field]
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # NaN is the only value not equal to itself
        return value == 0 or value != value
    return False


class DocumentPatch(BaseModel):
    """Sparse merge-update for one document. Only explicitly assigned fields are emitted."""

    model_config = ConfigDict(extra="forbid")

    def to_partial_update(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)

    def is_empty(self) -> bool:
        return not self.model_fields_set


class UserPatch(DocumentPatch):
    role: Optional[str] = None
    isOnline: Optional[bool] = None


class QueryPatch(DocumentPatch):
    status: Optional[str] = None
    assignedTo: Optional[Any] = None
    assignedBy: Optional[Any] = None
    assignedAt: Optional[Any] = None
    resolvedAt: Optional[Any] = None


class ChatPatch(DocumentPatch):
    participants: Optional[Dict[str, Any]] = None


class MessagePatch(DocumentPatch):
    status: Optional[str] = None


def build_user_patch(data: Mapping[str, Any]) -> UserPatch:
    patch = UserPatch()
    if is_unset(data, "role"):
        patch.role = DEFAULT_USER_ROLE
    # isOnline only follows a role defaulted in this same pass, not an existing "agent" role.
    if patch.role == DEFAULT_USER_ROLE and "isOnline" not in data:
        patch.isOnline = False
    return patch


def build_query_patch(data: Mapping[str, Any]) -> QueryPatch:
    patch = QueryPatch()
    if is_unset(data, "status"):
        patch.status = DEFAULT_QUERY_STATUS
    for field in QUERY_ASSIGNMENT_FIELDS:
        if field not in data:
            setattr(patch, field, None)
    return patch


def build_chat_patch(data: Mapping[str, Any]) -> ChatPatch:
    patch = ChatPatch()
    if is_unset(data, "participants"):
        patch.participants = {}
    return patch


def build_message_patch(data: Mapping[str, Any]) -> MessagePatch:
    patch = MessagePatch()
    if is_unset(data, "status"):
        patch.status = DEFAULT_MESSAGE_STATUS
    return patch


def describe_chat_update(updates: Dict[str, Any]) -> str:
    return "added empty participants"


def describe_message_update(updates: Dict[str, Any]) -> str:
    return f"set status to {updates.get('status')}"


@dataclass(frozen=True)
class CollectionRule:
    collection: str
    label: str
    build_patch: Callable[[Mapping[str, Any]], DocumentPatch]
    # Text after "Updated <label> <id>: " in the progress line
    describe: Callable[[Dict[str, Any]], str] = str


# Phase order is fixed: users -> queries -> chats -> messages
BACKFILL_RULES = (
    CollectionRule("users", "user", build_user_patch),
    CollectionRule("queries", "query", build_query_patch),
    CollectionRule("chats", "chat", build_chat_patch, describe_chat_update),
    CollectionRule("messages", "message", build_message_patch, describe_message_update),
)
