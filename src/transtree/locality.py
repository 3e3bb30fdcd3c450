"""Descendants and local neighbourhoods in a transmission tree."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .tree import IMPORTED, check_case


def find_descendants(alpha: Sequence[Optional[int]], i: int) -> List[int]:
    """Cases whose recorded infector is ``i``, in ascending order."""
    check_case(i, len(alpha))
    return [k for k, a in enumerate(alpha, start=1) if a == i]


def find_local_cases(alpha: Sequence[Optional[int]], i: int) -> List[int]:
    """Cases whose likelihood term may change when ``i`` moves in the tree.

    Returned in this order: ``i``, the descendants of ``i``, the ancestor of
    ``i``, then the ancestor's other descendants. The ancestor terms are
    skipped for imported cases.
    """
    slot = check_case(i, len(alpha))
    local = [i]
    local.extend(find_descendants(alpha, i))

    ancestor = alpha[slot]
    if ancestor is not IMPORTED:
        local.append(ancestor)
        local.extend(k for k in find_descendants(alpha, ancestor) if k != i)

    return local
