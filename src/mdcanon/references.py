#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcanon/references.py
"""Reference link definitions collected from a document.

The tokenizer hands the renderer every ``[label]: destination "title"``
definition it found, wherever it appeared in the source. The renderer keeps
them in a :class:`ReferenceTable` sorted by label, resolves reference-style
links against it, and re-emits the whole table after the document body.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_label(label: str) -> str:
    """Normalize a link label for matching.

    Labels match case-insensitively, with leading/trailing whitespace removed
    and internal whitespace runs collapsed to a single space.

    Examples
    --------
        >>> normalize_label("  Foo\\n  Bar ")
        'foo bar'

    """
    return _WHITESPACE_RUN.sub(" ", label.strip()).casefold()


@dataclass(frozen=True)
class ReferenceDefinition:
    """A single reference definition.

    Parameters
    ----------
    label : str
        Label as written in the source
    destination : str
        Link destination
    title : str or None, default None
        Optional title

    """

    label: str
    destination: str
    title: Optional[str] = None

    @property
    def key(self) -> str:
        return normalize_label(self.label)

    def to_markdown(self) -> str:
        """Render the definition line without a trailing newline.

        Examples
        --------
            >>> ReferenceDefinition("site", "https://example.com", "Home").to_markdown()
            '[site]: https://example.com "Home"'

        """
        line = f"[{self.label}]: {self.destination}"
        if self.title:
            escaped = self.title.replace('"', '\\"')
            line += f' "{escaped}"'
        return line


class ReferenceTable:
    """Reference definitions sorted lexicographically by label.

    Parameters
    ----------
    definitions : iterable of ReferenceDefinition, optional
        Definitions to hold; order does not matter

    """

    def __init__(self, definitions: Iterable[ReferenceDefinition] = ()):
        self._definitions: list[ReferenceDefinition] = sorted(definitions, key=lambda d: d.label)
        self._by_key: dict[str, ReferenceDefinition] = {}
        for definition in self._definitions:
            self._by_key.setdefault(definition.key, definition)

    def __iter__(self) -> Iterator[ReferenceDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __bool__(self) -> bool:
        return bool(self._definitions)

    def __repr__(self) -> str:
        return f"ReferenceTable({self._definitions!r})"

    def lookup(self, label: Optional[str] = None, destination: Optional[str] = None) -> Optional[ReferenceDefinition]:
        """Find the definition a link refers to.

        A label match wins; when there is none, the first definition (in
        label order) whose destination equals ``destination`` ignoring case
        is returned.

        Parameters
        ----------
        label : str, optional
            Reference label written in the link
        destination : str, optional
            Resolved destination of the link

        Returns
        -------
        ReferenceDefinition or None
            The matching definition, if any

        """
        if label is not None:
            found = self._by_key.get(normalize_label(label))
            if found is not None:
                return found

        if destination is not None:
            wanted = destination.casefold()
            for definition in self._definitions:
                if definition.destination.casefold() == wanted:
                    return definition

        return None
