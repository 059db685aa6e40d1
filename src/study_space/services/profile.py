from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Optional

from ..domain import Profile
from ..errors import RecordNotFoundError
from .context import ServiceContext


@dataclass(slots=True)
class ProfileService:
    context: ServiceContext

    @property
    def profile(self) -> Optional[Profile]:
        items = self.context.profiles.items
        return items[0] if items else None

    def _require(self) -> Profile:
        profile = self.profile
        if profile is None:
            raise RecordNotFoundError("No profile exists yet.")
        return profile

    def update(self, **changes: Any) -> Profile | None:
        profile = self._require()
        return self.context.profiles.update(profile.id, **changes)

    def rename(self, username: str) -> Profile | None:
        if not username.strip():
            raise ValueError("Username must not be empty.")
        return self.update(username=username.strip())

    def upload_avatar(self, filename: str, data: bytes, *, content_type: str = "image/png") -> str:
        """Store a new avatar image and point the profile at its public URL."""

        profile = self._require()
        extension = PurePath(filename).suffix.lstrip(".") or "png"
        key = f"{profile.id}-{int(time.time() * 1000)}.{extension}"
        self.context.avatars.upload(key, data, overwrite=False, no_cache=False, content_type=content_type)
        url = self.context.avatars.public_url(key)
        self.update(avatar_url=url)
        return url
