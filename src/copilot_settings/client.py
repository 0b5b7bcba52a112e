"""Interface of the remote assistant client the settings panel drives."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel

ALREADY_SIGNED_IN = "AlreadySignedIn"


class SignInResult(BaseModel):
    """Reply to a sign-in request: either already signed in or a device code to enter."""

    status: str
    user_code: str | None = None
    verification_uri: str | None = None

    @property
    def already_signed_in(self) -> bool:
        return self.status == ALREADY_SIGNED_IN


@runtime_checkable
class AssistantClient(Protocol):
    """Sign-in/sign-out side of the assistant service (black box)."""

    async def initiate_sign_in(self) -> SignInResult: ...

    async def sign_out(self) -> None: ...
