from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings, load_settings
from ..models import UserProfile
from ..utils import now_iso


@dataclass(frozen=True)
class RunContext:
    """Per-run inputs captured when a batch starts.

    The profile is a deep copy, so form edits made while the run is in
    flight cannot change the prompts of files not yet processed.
    """

    profile: UserProfile
    settings: Settings
    created_at: str

    @classmethod
    def create(
        cls,
        *,
        profile: UserProfile | None = None,
        settings: Settings | None = None,
    ) -> "RunContext":
        snapshot = profile.model_copy(deep=True) if profile is not None else UserProfile()
        return cls(
            profile=snapshot,
            settings=settings or load_settings(),
            created_at=now_iso(),
        )
