"""Traversal engine: walks each root, matches entries, runs actions."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol, TextIO

from findlite.compiler import Query
from findlite.matcher import Entry, matches

logger = logging.getLogger(__name__)


class EntryFilter(Protocol):
    """Protocol for excluding entries from a walk.

    An excluded entry is neither matched nor descended into.
    """

    def should_exclude(self, rel_path: str, is_dir: bool) -> bool: ...


EntryFilterFactory = Callable[[str], "EntryFilter | None"]


@dataclass(slots=True)
class TraversalContext:
    """Per-root walk state.

    Attributes:
        root: Root path exactly as given.
        pending_deletes: Matched paths scheduled for deletion, in
            discovery order.
    """

    root: str
    pending_deletes: list[str] = field(default_factory=list)


def format_display_path(root: str, rel: str) -> str:
    """Re-attach *root* to a root-relative path.

    The root itself (empty *rel*) displays as the literal root string.
    """
    if not rel:
        return root
    if root.endswith(os.sep):
        return root + rel
    return root + os.sep + rel


def find(
    roots: Sequence[str],
    query: Query,
    out: TextIO,
    *,
    entry_filter_factory: EntryFilterFactory | None = None,
) -> int:
    """Walk every root in order and apply *query*.

    Deletions are deferred until a root's walk has finished and then run
    in reverse discovery order, so descendants go before their parent
    directory.

    Args:
        roots: Root paths, walked in the given order.
        query: Compiled query.
        out: Sink receiving one line per printed match.
        entry_filter_factory: Optional callable building an
            :class:`EntryFilter` for each root.

    Returns:
        int: Number of matched entries across all roots.

    Raises:
        PatternError: If a pattern in *query* is malformed.
        OSError: On the first unreadable entry or failed deletion.
    """
    total = 0
    for root in roots:
        entry_filter = entry_filter_factory(root) if entry_filter_factory else None
        ctx = TraversalContext(root)
        total += _walk_root(ctx, query, out, entry_filter)
        if query.delete:
            _run_deletes(ctx)
    return total


def _visit(ctx: TraversalContext, query: Query, out: TextIO, entry: Entry, depth: int) -> bool:
    if not matches(query, entry, depth):
        return False
    if query.print:
        out.write(entry.display_path + "\n")
    if query.delete:
        ctx.pending_deletes.append(entry.path)
    return True


def _walk_root(
    ctx: TraversalContext,
    query: Query,
    out: TextIO,
    entry_filter: EntryFilter | None,
) -> int:
    """Pre-order walk of one root; returns the number of matches."""
    root_entry = Entry.from_stat(ctx.root, os.lstat(ctx.root))
    count = 0

    # Stack items: (entry, relative path, depth). Children are pushed in
    # reverse name order so the first name is visited first.
    stack: list[tuple[Entry, str, int]] = [(root_entry, "", 0)]

    while stack:
        entry, rel, depth = stack.pop()

        if query.max_depth is not None and depth > query.max_depth:
            if entry.is_dir:
                logger.debug("Pruned below max depth: %s", entry.path)
            continue

        if _visit(ctx, query, out, entry, depth):
            count += 1

        if not entry.is_dir:
            continue

        with os.scandir(entry.path) as it:
            children = sorted(it, key=lambda e: e.name)

        pushed: list[tuple[Entry, str, int]] = []
        for dir_entry in children:
            child_rel = os.path.join(rel, dir_entry.name) if rel else dir_entry.name
            child = Entry.from_dir_entry(dir_entry, format_display_path(ctx.root, child_rel))
            if entry_filter is not None and entry_filter.should_exclude(child_rel, child.is_dir):
                logger.debug("Excluded: %s", child.path)
                continue
            pushed.append((child, child_rel, depth + 1))

        stack.extend(reversed(pushed))

    return count


def _remove(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.unlink(path)


def _run_deletes(ctx: TraversalContext) -> None:
    """Delete scheduled paths, last discovered first.

    The first failure propagates; entries already removed stay removed.
    """
    for path in reversed(ctx.pending_deletes):
        logger.debug("Deleting: %s", path)
        _remove(path)
    ctx.pending_deletes.clear()
