"""Доменные модели виджетов."""

from .entities import FormMode, ListSchema, Location, Message, MessageKind, Profile, Record

__all__ = [
    "Record",
    "ListSchema",
    "FormMode",
    "Message",
    "MessageKind",
    "Location",
    "Profile",
]
