# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rewrites XML documentation text into TypeScript and C# comment blocks."""

from __future__ import annotations

import re

from declgen.generator.text import to_camel_case

# ###############
# Public Interface
# ###############


def rewrite_documentation(comment: str) -> str:
    """Replace XML documentation markup with TypeScript doc syntax.

    ``<c>`` markers become backticks, self-closing ``<see cref="..."/>``
    references become ``{@link Type.member}`` tokens and paired
    ``<see cref="...">text</see>`` references collapse to their text.
    """
    comment = comment.replace("<c>", "`").replace("</c>", "`")
    comment = _SELF_CLOSING_SEE.sub(_link_token, comment)
    return _PAIRED_SEE.sub(r"\1", comment)


def typescript_comment_block(comment: str | None, indent: int = 0) -> str:
    """Render documentation text as a TypeScript ``/** ... */`` comment.

    Args:
        comment: Documentation text, possibly containing XML markup.
        indent: Number of spaces placed before every comment line.

    Returns:
        The comment lines, each terminated by a newline, or an empty string
        when there is no text.
    """
    lines = _comment_lines(rewrite_documentation(comment) if comment else None)
    if lines is None:
        return ""

    pad = " " * indent

    if len(lines) == 1:
        return f"{pad}/** {lines[0]} */\n"

    body = "".join(f"{pad} * {line}".rstrip() + "\n" for line in lines)
    return f"{pad}/**\n{body}{pad} */\n"


def csharp_comment_block(comment: str | None, indent: int = 0) -> str:
    """Render documentation text as a C# ``/// <summary>`` comment."""
    lines = _comment_lines(comment)
    if lines is None:
        return ""

    pad = " " * indent
    body = "".join(f"{pad}/// {line}".rstrip() + "\n" for line in lines)
    return f"{pad}/// <summary>\n{body}{pad}/// </summary>\n"


# ################
# Implementation
# ################

_SELF_CLOSING_SEE = re.compile(r'<see\s+cref="([^"]+)"\s*/>')
_PAIRED_SEE = re.compile(r'<see\s+cref="[^"]+"\s*>([^<]*)</see>')


def _link_token(match: re.Match[str]) -> str:
    target = match.group(1)

    # Only documentation ids such as "P:Ns.Type.Member" can be linked.
    if len(target) < 2 or target[1] != ":":
        return target

    segments = target[2:].split(".")
    if len(segments) < 2:
        return target

    owner, member = segments[-2], segments[-1]

    # Fields are enumeration members and keep their case.
    if target[0] == "F":
        return f"{{@link {owner}.{member}}}"
    return f"{{@link {owner}.{to_camel_case(member)}}}"


def _comment_lines(comment: str | None) -> list[str] | None:
    """Split comment text into lines, collapsing paragraph breaks."""
    if comment is None or not comment.strip():
        return None

    text = comment.replace("\r\n", "\n").strip()

    # Paragraph breaks arrive as three line breaks.
    text = text.replace("\n\n\n", "\n\n")
    return text.split("\n")
