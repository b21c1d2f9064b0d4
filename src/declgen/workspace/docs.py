# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Documentation text providers keyed by .NET documentation ids.

Documentation ids follow the compiler's XML documentation scheme:
``T:Namespace.Type`` for types, ``P:Namespace.Type.Property`` for properties
and ``F:Namespace.Type.Field`` for fields and enumeration members.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Protocol
from xml.sax.saxutils import escape

from declgen.model.handles import TypeHandle

# ###############
# Public Interface
# ###############


class DocumentationError(Exception):
    """Raised when a documentation file cannot be read or parsed."""


class DocumentationProvider(Protocol):
    """Source of summary text for types and their members."""

    def type_summary(self, handle: TypeHandle) -> str | None: ...

    def member_summary(self, owner: TypeHandle, member_name: str) -> str | None: ...


class MappingDocumentationProvider:
    """Documentation provider backed by a dictionary of documentation ids."""

    def __init__(self, summaries: dict[str, str]) -> None:
        self._summaries = dict(summaries)

    def type_summary(self, handle: TypeHandle) -> str | None:
        return self._summaries.get(f"T:{handle.full_name}")

    def member_summary(self, owner: TypeHandle, member_name: str) -> str | None:
        for prefix in ("P", "F"):
            summary = self._summaries.get(f"{prefix}:{owner.full_name}.{member_name}")
            if summary is not None:
                return summary
        return None


class XmlDocReader(MappingDocumentationProvider):
    """Documentation provider that reads compiler-generated XML documentation files.

    The ``<summary>`` of each ``/doc/members/member`` element is kept with its
    inner markup, so that references can later be rewritten into the target
    comment syntax. Members that only carry ``<inheritdoc cref="..."/>``
    resolve to the summary of the referenced member.
    """

    def __init__(self) -> None:
        super().__init__({})
        self._inherits: dict[str, str] = {}

    def read_file(self, path: Path) -> None:
        """Read one documentation file. Earlier entries win over later ones.

        Raises:
            DocumentationError: If the file cannot be read or is not valid XML.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise DocumentationError(f"Documentation file not found: {path}") from None
        except OSError as exc:
            raise DocumentationError(f"Cannot read documentation file: {exc}") from exc

        self.read_text(text, source_label=str(path))

    def read_text(self, text: str, source_label: str = "<string>") -> None:
        """Read documentation XML from a string.

        Raises:
            DocumentationError: If the text is not valid XML.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise DocumentationError(f"Invalid documentation XML in {source_label}: {exc}") from exc

        for member in root.iterfind("./members/member"):
            name = member.get("name")
            if not name or name in self._summaries or name in self._inherits:
                continue

            summary = member.find("summary")
            if summary is not None:
                self._summaries[name] = _inner_content(summary)
                continue

            inherit = member.find("inheritdoc")
            if inherit is not None and inherit.get("cref"):
                self._inherits[name] = inherit.get("cref", "")

    def type_summary(self, handle: TypeHandle) -> str | None:
        return self._lookup(f"T:{handle.full_name}")

    def member_summary(self, owner: TypeHandle, member_name: str) -> str | None:
        for prefix in ("P", "F"):
            summary = self._lookup(f"{prefix}:{owner.full_name}.{member_name}")
            if summary is not None:
                return summary
        return None

    def _lookup(self, doc_id: str) -> str | None:
        seen: set[str] = set()
        while doc_id not in self._summaries:
            if doc_id not in self._inherits or doc_id in seen:
                return None
            seen.add(doc_id)
            doc_id = self._inherits[doc_id]
        return self._summaries[doc_id]


# ################
# Implementation
# ################


def _inner_content(element: ET.Element) -> str:
    """Return the inner XML of an element with its common indentation removed.

    Leading text is escaped the same way as the serialized children.
    """
    inner = escape(element.text or "") + "".join(ET.tostring(child, encoding="unicode") for child in element)
    lines = inner.replace("\r\n", "\n").split("\n")

    # The closing tag's indentation is the indentation of every content line.
    indent = len(lines[-1]) if len(lines) > 1 and not lines[-1].strip() else 0
    lines = [line[indent:] if line[:indent].isspace() else line.lstrip() for line in lines]

    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()

    return "\n".join(line.rstrip() for line in lines)
