"""Simple data models shared across the package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from ..exceptions import MalformedError


@dataclass(frozen=True)
class Link:
    """One entry of a ``<collection>_links`` array."""

    href: str
    rel: str = ""

    @classmethod
    def from_json(cls, payload: Mapping[str, Any], path: str = "link") -> "Link":
        """Build a link, rejecting a present ``href`` or ``rel`` that is not a string."""
        values = {}
        for key in ("href", "rel"):
            value = payload.get(key)
            if value is not None and not isinstance(value, str):
                raise MalformedError(
                    f"link {key} must be a string", path=f"{path}.{key}", value=value
                )
            values[key] = value or ""
        return cls(**values)


def parse_links(raw: Any, path: str = "links") -> List[Link]:
    """Turn a wire link array into ``Link`` objects.

    An absent array yields no links. Entries that are not mappings are skipped,
    but an array that is not a list at all is malformed, as is an entry whose
    ``href`` or ``rel`` is not a string.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedError("link array must be a list", path=path, value=raw)
    return [
        Link.from_json(entry, path=f"{path}[{i}]")
        for i, entry in enumerate(raw)
        if isinstance(entry, Mapping)
    ]


def extract_next_url(links: Sequence[Link]) -> Optional[str]:
    """Return the target of the first ``rel == "next"`` link, if any."""
    for link in links:
        if link.rel == "next" and link.href:
            return link.href
    return None
