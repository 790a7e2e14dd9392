"""Immutable GraphQL selection sets with de-duplicating merge."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

INDENT = "  "


@dataclass(frozen=True)
class Field:
    """One GraphQL field, optionally with arguments and a sub-selection."""

    name: str
    arguments: str = ""
    children: tuple[Field, ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children


def field(name: str, *children: Field | str, args: str = "") -> Field:
    """Shorthand constructor; bare strings become leaf fields."""
    return Field(
        name=name,
        arguments=args,
        children=tuple(Field(c) if isinstance(c, str) else c for c in children),
    )


def leaves(*names: str) -> tuple[Field, ...]:
    return tuple(Field(name) for name in names)


def merge_selections(*selections: Iterable[Field]) -> tuple[Field, ...]:
    """Deep-union selection sets, keyed by field name.

    Same-named fields are merged into one, recursively, so two criteria that
    both need ``orders`` produce a single ``orders`` selection. GraphQL rejects
    same-named siblings with different arguments, so that case raises.
    """
    merged: dict[str, Field] = {}
    for selection in selections:
        for item in selection:
            existing = merged.get(item.name)
            if existing is None:
                merged[item.name] = item
                continue
            if existing.arguments != item.arguments:
                raise ValueError(
                    f"Conflicting arguments for field {item.name!r}: "
                    f"({existing.arguments}) vs ({item.arguments})"
                )
            merged[item.name] = Field(
                name=item.name,
                arguments=item.arguments,
                children=merge_selections(existing.children, item.children),
            )
    return tuple(merged.values())


def render_selection(selection: Iterable[Field], depth: int = 0) -> str:
    """Render a selection set as GraphQL text, one field per line."""
    pad = INDENT * depth
    lines: list[str] = []
    for item in selection:
        head = f"{pad}{item.name}({item.arguments})" if item.arguments else f"{pad}{item.name}"
        if item.is_leaf:
            lines.append(head)
        else:
            lines.append(f"{head} {{")
            lines.append(render_selection(item.children, depth + 1))
            lines.append(f"{pad}}}")
    return "\n".join(lines)


def count_fields(selection: Iterable[Field], name: str) -> int:
    """Count fields called ``name`` anywhere in the tree."""
    total = 0
    for item in selection:
        if item.name == name:
            total += 1
        total += count_fields(item.children, name)
    return total
