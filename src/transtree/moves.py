"""Structural moves on a transmission tree.

Moves never touch the state they are given: they return a new ``TreeState``
and leave acceptance or rejection to the caller.
"""

from __future__ import annotations

import logging

from .tree import IMPORTED, TreeState

logger = logging.getLogger(__name__)


def swap_with_ancestor(state: TreeState, i: int) -> TreeState:
    """Swap case ``i`` with its ancestor ``x``, turning ``x -> i`` into ``i -> x``.

    The descendants of ``i`` become descendants of ``x`` and vice versa, ``i``
    inherits the ancestor of ``x``, ``x`` is now infected by ``i``, and the two
    infection times are exchanged.

    Swaps are forbidden when ``i`` is imported or when ``x`` is imported. A
    forbidden swap is not an error: the returned state is an unchanged copy,
    which the sampler then rejects as a no-op.

    Args:
        state: Current tree state; never modified
        i: Focus case, on the 1..N scale

    Returns:
        A new tree state
    """
    slot_i = state.check_case(i)
    alpha_in = state.alpha
    out = state.copy()

    x = alpha_in[slot_i]
    if x is IMPORTED:
        logger.debug(f"Swap of case {i} forbidden: case is imported")
        return out

    slot_x = state.check_case(x)
    if alpha_in[slot_x] is IMPORTED:
        logger.debug(f"Swap of case {i} forbidden: ancestor {x} is imported")
        return out

    # relink from the pre-move ancestries so the order of updates is irrelevant
    alpha_out = out.alpha
    for slot, ancestor in enumerate(alpha_in):
        if ancestor == i:
            alpha_out[slot] = x
        elif ancestor == x:
            alpha_out[slot] = i

    alpha_out[slot_i] = alpha_in[slot_x]
    alpha_out[slot_x] = i

    out.t_inf[slot_i] = state.t_inf[slot_x]
    out.t_inf[slot_x] = state.t_inf[slot_i]

    return out
