"""Upload selection tracking across Streamlit reruns."""
from typing import Any, Callable, MutableMapping, Sequence

SIGNATURE_KEY = "upload_signature"


def upload_signature(uploads: Sequence[Any]) -> tuple:
    return tuple((u.name, getattr(u, "size", None), getattr(u, "file_id", None)) for u in uploads)


def start_if_new_selection(state: MutableMapping, uploads: Sequence[Any], start: Callable[[], None]) -> bool:
    """
    Run start() once per distinct file selection.

    The signature is recorded only after start() returns, so a run that
    raised is retried on the next rerun with the same selection.
    """
    signature = upload_signature(uploads)
    if signature == state.get(SIGNATURE_KEY):
        return False
    start()
    state[SIGNATURE_KEY] = signature
    return True
