import re
from typing import Optional

_PULL_URL_PATTERN = re.compile(
    r'^(?:https?://[^/\s]+|[^/\s]+\.[^/\s]+)/[^/\s]+/[^/\s]+/pull/(\d+)'
)
_HASH_NUMBER_PATTERN = re.compile(r'^#(\d+)$')
_TICKET_KEY_PATTERN = re.compile(r'([A-Z]+-\d+)')


def normalize_pr_ref(ref: str) -> str:
    """Return the identifier the source-control collaborator accepts.

    Pull request URLs (``https://host/org/repo/pull/2125/files`` or a
    scheme-less ``github.com/org/repo/pull/2125``) and ``#2125`` collapse to
    the bare number. A URL needs a scheme or a dotted host, so branch names
    that happen to contain ``/pull/<n>`` are returned as given, as is anything
    else.
    """
    candidate = ref.strip()
    url_match = _PULL_URL_PATTERN.search(candidate)
    if url_match:
        return url_match.group(1)
    hash_match = _HASH_NUMBER_PATTERN.match(candidate)
    if hash_match:
        return hash_match.group(1)
    return ref


def extract_ticket_key(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    match = _TICKET_KEY_PATTERN.search(text)
    return match.group(1) if match else None


def find_ticket_key(*candidates: Optional[str]) -> Optional[str]:
    for text in candidates:
        key = extract_ticket_key(text)
        if key is not None:
            return key
    return None
