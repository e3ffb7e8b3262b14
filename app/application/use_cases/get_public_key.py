from __future__ import annotations

from app.application.dto.billing import PublicKeyOutput


class GetPublicKeyUseCase:
    def __init__(self, *, publishable_key: str):
        self._publishable_key = publishable_key

    def execute(self) -> PublicKeyOutput:
        return PublicKeyOutput(public_key=self._publishable_key)
