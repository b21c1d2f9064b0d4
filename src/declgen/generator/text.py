# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""String helpers shared by the classifier and the generators."""

from __future__ import annotations

import re

from declgen.model.handles import TypeHandle

# ###############
# Public Interface
# ###############


def to_camel_case(value: str) -> str:
    """Convert a PascalCase identifier to camelCase.

    A leading run of capitals is lowered as a unit, keeping the capital that
    starts the next word: ``FOOBar`` becomes ``fooBar``, ``FOO bar`` becomes
    ``foo bar``.
    """
    if not value or not value[0].isupper():
        return value

    chars = list(value)

    for i in range(len(chars)):
        if i == 1 and not chars[i].isupper():
            break

        has_next = i + 1 < len(chars)

        if i > 0 and has_next and not chars[i + 1].isupper():
            if chars[i + 1].isspace():
                chars[i] = chars[i].lower()
            break

        chars[i] = chars[i].lower()

    return "".join(chars)


def split_case(value: str | None) -> str | None:
    """Split a camel- or Pascal-cased identifier into space separated words."""
    if value is None:
        return None

    return _LOWER_THEN_OTHER.sub(r"\1 \2", _ACRONYM_THEN_WORD.sub(r"\1 \2", value))


def domain_folder_name(domain: str) -> str:
    """Return the folder (and namespace) name for an enumeration domain.

    Mixed-case domains are kept as-is. All-capital domains keep two-letter
    acronyms such as ``UI`` and are otherwise capitalized: ``GROUP`` becomes
    ``Group``.
    """
    if domain != domain.upper():
        return domain

    if len(domain) == 2:
        return domain

    return domain[:1].upper() + domain[1:].lower()


def alphabetical_key(name: str) -> tuple[str, str]:
    """Sort key that orders names alphabetically regardless of case.

    Names differing only in case put the lower-case spelling first, so
    ``alias``, ``Id`` and ``IPAddress`` sort in that order.
    """
    return (name.casefold(), name.swapcase())


def constant_member_name(value: str) -> str:
    """Convert an ``UPPER_SNAKE`` constant name to PascalCase: ``PERSON_ALIAS`` -> ``PersonAlias``."""
    chars: list[str] = []
    start_word = True

    for ch in value:
        if start_word:
            chars.append(ch.upper())
            start_word = False
        elif ch == "_":
            start_word = True
        else:
            chars.append(ch.lower())

    return "".join(chars)


def strip_arity(name: str) -> str:
    """Remove the generic arity suffix from a type name: ``List`1`` -> ``List``."""
    return name.split("`", 1)[0]


def friendly_name(handle: TypeHandle) -> str:
    """Return a C#-like display name, e.g. ``Dictionary<String, List<Int32>>``."""
    if handle.is_array and handle.element_type is not None:
        return f"{friendly_name(handle.element_type)}[]"

    if handle.is_generic:
        args = ", ".join(friendly_name(arg) for arg in handle.generic_arguments)
        return f"{strip_arity(handle.name)}<{args}>"

    return handle.name


def class_name(handle: TypeHandle) -> str:
    """Return the declared class name, including type parameter names."""
    parameters = handle.type_parameters or [arg.name for arg in handle.generic_arguments]

    if parameters:
        return f"{strip_arity(handle.name)}<{', '.join(parameters)}>"

    return handle.name


def relative_path(namespace: str, root: str) -> list[str]:
    """Return the namespace segments below *root* (empty if it is the root)."""
    remainder = namespace[len(root):].strip(".")
    return [segment for segment in remainder.split(".") if segment]


# ################
# Implementation
# ################

# Splits an acronym from the word that follows it: "XMLFile" -> "XML File".
_ACRONYM_THEN_WORD = re.compile(r"([^a-z])([^a-z][a-z])")

# Splits a lowercase letter from the capital that follows it.
_LOWER_THEN_OTHER = re.compile(r"([a-z])([^a-z])")
