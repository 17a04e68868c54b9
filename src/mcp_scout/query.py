"""Pull the search term out of a chat-style command."""

from __future__ import annotations

_SLASH_COMMAND = "/search "
_PHRASE = "search servers "


def extract_search_query(text: str) -> str:
    """Return the search term from ``/search <q>`` or ``... search servers <q>``.

    Any other input is treated as the query itself, trimmed.
    """
    if text.startswith(_SLASH_COMMAND):
        return text[len(_SLASH_COMMAND) :].strip()
    index = text.find(_PHRASE)
    if index != -1:
        return text[index + len(_PHRASE) :].strip()
    return text.strip()
