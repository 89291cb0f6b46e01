"""Physical key names to CHIP-8 key symbols.

The keypad alphabet is the sixteen hex digits. Hosts poll their own input
device and pass the names of the keys currently held down; names outside
the alphabet are ignored.
"""

import operator
from typing import Iterable

import jax.numpy as jnp

from chipax.constants import NUM_KEYS
from chipax.errors import InvalidKeyError

KEY_MAP = {f"{symbol:X}": symbol for symbol in range(NUM_KEYS)}


def keys_from_names(names: Iterable[str]) -> frozenset:
    """Translate pressed physical key names into key symbols."""
    return frozenset(KEY_MAP[name.upper()] for name in names if name.upper() in KEY_MAP)


def keypad_from_keys(keys: Iterable[int]) -> jnp.ndarray:
    """Build the boolean keypad array for one cycle from key symbols."""
    pressed = set()
    for key in keys:
        try:
            symbol = operator.index(key)
        except TypeError:
            raise InvalidKeyError(key) from None
        if isinstance(key, bool) or not 0 <= symbol < NUM_KEYS:
            raise InvalidKeyError(key)
        pressed.add(symbol)
    return jnp.array([symbol in pressed for symbol in range(NUM_KEYS)], dtype=jnp.bool_)
