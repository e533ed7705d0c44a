from __future__ import annotations

import hashlib


def hash_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def hash_text_short(text: str) -> str:
    return hash_text(text)[:12]


def text_fingerprint(text: str) -> dict[str, object]:
    return {"chars": len(text), "lines": text.count("\n") + 1 if text else 0, "digest": hash_text_short(text)}
