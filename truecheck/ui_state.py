"""Dashboard session helpers."""
from __future__ import annotations

from typing import MutableMapping

RESULT_KEY = "last_result"
UPLOAD_KEY = "last_result_key"


def upload_key(name: str, data: bytes) -> str:
    return f"{name}:{len(data)}"


def reset_on_new_upload(state: MutableMapping, key: str) -> bool:
    """Drop the stored result when a different file is uploaded. Returns True if reset."""
    if state.get(UPLOAD_KEY) == key:
        return False
    state.pop(RESULT_KEY, None)
    state[UPLOAD_KEY] = key
    return True
