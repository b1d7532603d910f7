"""Short customer reference codes (max 10 uppercase alphanumerics)."""

from __future__ import annotations

import re
import uuid
from collections.abc import Iterable

MAX_LENGTH = 10

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def sanitize_customer_code(value: str | None) -> str:
    return _NON_ALNUM.sub("", (value or "").upper())[:MAX_LENGTH]


def generate_customer_code(name: str | None, business_name: str | None = None) -> str:
    """Build a code from the business name, falling back to the person's name."""
    source = (business_name or "").strip() or (name or "").strip()
    return sanitize_customer_code(source)


def make_code_unique(base_code: str, existing_codes: Iterable[str]) -> str:
    """Append 2..99 to *base_code* until it is unused, keeping 10 chars max."""
    taken = set(existing_codes)
    if base_code not in taken:
        return base_code

    for i in range(2, 100):
        suffix = str(i)
        candidate = base_code[: MAX_LENGTH - len(suffix)] + suffix
        if candidate not in taken:
            return candidate

    return base_code[:7] + uuid.uuid4().hex[:3].upper()
