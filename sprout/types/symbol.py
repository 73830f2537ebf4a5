"""Identifier hashing for Sprout.

Names are never stored as text in the AST or the environment: each spelling is
hashed to a 64-bit key and the key is the identity. Distinct spellings that hash
to the same key are the same binding.
"""

from __future__ import annotations

import hashlib
from collections import OrderedDict

from sprout import Identifier

# Diagnostic-only reverse table; name resolution never reads it.
# Oldest entries are evicted once it holds MAX_SPELLINGS names.
MAX_SPELLINGS = 65536
_spellings: OrderedDict[Identifier, str] = OrderedDict()


def hash_name(name: str) -> Identifier:
    """Hash `name` to its 64-bit identifier key.

    BLAKE2b is used instead of the built-in hash() so keys are stable across
    processes regardless of PYTHONHASHSEED.
    """
    digest = hashlib.blake2b(name.encode("utf-8"), digest_size=8).digest()
    ident = int.from_bytes(digest, "little")
    if ident not in _spellings:
        _spellings[ident] = name
        while len(_spellings) > MAX_SPELLINGS:
            _spellings.popitem(last=False)
    return ident


def spelling(ident: Identifier) -> str:
    """Best-effort spelling of `ident` for error messages and printing.

    Falls back to the hex key for names never seen, or evicted from the table.
    """
    name = _spellings.get(ident)
    if name is None:
        return f"#{ident:016x}"
    return name
