from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from ..config import Settings
from ..errors import NarrativeRequestError
from ..models import UserProfile

logger = logging.getLogger(__name__)

FALLBACK_NARRATIVE = "Recommendation unavailable."
ANONYMOUS = "Anonymous"
NO_HISTORY = "None"


class NarrativeClient(Protocol):
    """Anything that can turn a prompt into generated text.

    Implementations return None when the service answered without text and
    raise NarrativeRequestError when the request itself failed.
    """

    def complete(self, prompt: str) -> Optional[str]:
        ...


def _format_number(v: float) -> str:
    v = float(v)
    return str(int(v)) if v.is_integer() else repr(v)


def format_values(values: Sequence[float]) -> str:
    return ", ".join(_format_number(v) for v in values)


def build_prompt(profile: UserProfile, values: Sequence[float]) -> str:
    """Build the single user-role prompt for one sample."""

    return (
        "Below are ECG (electrocardiogram) features for one person, 20 values in total, "
        "provided for assisted medical assessment.\n"
        "Personal details:\n"
        f"Name: {profile.name.strip() or ANONYMOUS}\n"
        f"Age: {profile.age}\n"
        f"Gender: {profile.gender}\n"
        f"Medical history: {profile.history.strip() or NO_HISTORY}\n"
        "\n"
        "Acting as a cardiologist, judge from the trend of the ECG values whether this person "
        "is likely to develop heart failure within the next 1-3 years, and give a risk "
        "explanation, prevention advice and advice on seeing a doctor.\n"
        "\n"
        "ECG data:\n"
        f"{format_values(values)}\n"
        "\n"
        "Please answer as a bulleted list, in a friendly tone.\n"
    )


def extract_content(response: Any) -> Optional[str]:
    """Return choices[0].message.content, or None when any part is missing."""

    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError):
        return None
    return content if isinstance(content, str) else None


class OpenAIChatClient:
    """Chat-completion client backed by the openai SDK.

    One request per call. Retries default to zero and every request carries
    the configured timeout.
    """

    def __init__(self, settings: Settings, sdk_client: Any = None):
        self.settings = settings
        self._sdk_client = sdk_client

    def _client(self) -> Any:
        if self._sdk_client is not None:
            return self._sdk_client
        if not self.settings.openai_api_key:
            raise NarrativeRequestError("OPENAI_API_KEY is not configured.")
        from openai import OpenAI

        self._sdk_client = OpenAI(
            api_key=self.settings.openai_api_key,
            base_url=self.settings.openai_base_url,
            timeout=self.settings.request_timeout_s,
            max_retries=self.settings.max_retries,
        )
        return self._sdk_client

    def complete(self, prompt: str) -> Optional[str]:
        import openai

        client = self._client()
        try:
            resp = client.chat.completions.create(
                model=self.settings.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as e:
            raise NarrativeRequestError(f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            # Body that is not valid JSON.
            raise NarrativeRequestError(f"Malformed response: {e}") from e
        return extract_content(resp)


def request_narrative(profile: UserProfile, values: Sequence[float], *, client: NarrativeClient) -> str:
    """Request the narrative for one valid sample.

    Exactly one call to the client. An empty or missing reply becomes
    FALLBACK_NARRATIVE; request failures propagate as NarrativeRequestError.
    """

    prompt = build_prompt(profile, values)
    text = client.complete(prompt)
    if not text or not text.strip():
        logger.info("Narrative reply had no content; using fallback")
        return FALLBACK_NARRATIVE
    return text.strip()
