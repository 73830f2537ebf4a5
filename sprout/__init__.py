# Core type aliases for Sprout's data model.
#
# Naming guidance:
# - Identifier: the fixed-width integer key a name is hashed to (see sprout.types.symbol).
# - Value:      a runtime datum produced by the evaluator (see sprout.types.values).
# Both are plain aliases so the reader and evaluator can share annotations without
# importing each other.

from typing import Any, Callable, Sequence

Identifier = int

# Runtime value alias
Value = Any

# Host-provided native: takes the evaluated arguments in order, returns a Value
NativeFn = Callable[[Sequence[Value]], Value]
