"""Последовательный просмотр анкет."""
from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Sequence

import yaml

from list_sync.models import Profile

DEFAULT_PROFILES: List[Profile] = [
    Profile(
        name="John Doe",
        age=32,
        gender="Male",
        looking_for="Female",
        location="Boston MA",
        image="https://randomuser.me/api/portraits/men/82.jpg",
    ),
    Profile(
        name="Jen Smith",
        age=26,
        gender="Female",
        looking_for="Male",
        location="Miami FL",
        image="https://randomuser.me/api/portraits/women/82.jpg",
    ),
    Profile(
        name="William Johnson",
        age=38,
        gender="Male",
        looking_for="Female",
        location="Lynn MA",
        image="https://randomuser.me/api/portraits/men/83.jpg",
    ),
]


class ProfileIterator(Iterator[Profile]):
    """Итератор по анкетам с возможностью начать сначала."""

    def __init__(self, profiles: Sequence[Profile]) -> None:
        self._profiles = list(profiles)
        self._next_index = 0

    def __iter__(self) -> "ProfileIterator":
        return self

    def __next__(self) -> Profile:
        if self._next_index >= len(self._profiles):
            raise StopIteration
        profile = self._profiles[self._next_index]
        self._next_index += 1
        return profile

    def reset(self) -> None:
        self._next_index = 0


def load_profiles(path: Path | str) -> List[Profile]:
    """Загружает анкеты из YAML-списка."""
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or []
    profiles = []
    for item in raw:
        profiles.append(
            Profile(
                name=str(item["name"]),
                age=int(item["age"]),
                gender=str(item.get("gender", "")),
                looking_for=str(item.get("looking_for") or item.get("lookingfor") or ""),
                location=str(item.get("location", "")),
                image=str(item.get("image", "")),
            )
        )
    return profiles


def format_profile(profile: Profile) -> List[str]:
    return [
        f"Name: {profile.name}",
        f"Age: {profile.age}",
        f"Location: {profile.location}",
        f"Preference: {profile.gender} looking for {profile.looking_for}",
        f"Image: {profile.image}",
    ]


__all__ = ["ProfileIterator", "DEFAULT_PROFILES", "load_profiles", "format_profile"]
