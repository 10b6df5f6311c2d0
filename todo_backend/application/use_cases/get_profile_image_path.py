from __future__ import annotations

from pathlib import Path

from todo_backend.application.ports.user_store_port import UserStorePort

from .auth_common import require_user


class GetProfileImagePathUseCase:
    def __init__(self, *, user_store: UserStorePort, upload_root_path: str):
        self._user_store = user_store
        self._upload_root_path = upload_root_path

    def execute(self, *, user_id: str) -> str | None:
        user = require_user(user_store=self._user_store, user_id=user_id)
        image = user.profile_image_path
        if not image:
            return None
        # Social accounts keep the provider's absolute URL.
        if image.startswith("http"):
            return image
        return str(Path(self._upload_root_path) / image)
