"""Process-wide identity source for dispatch tokens.

Tokens only need to be unique and stable for the lifetime of the process.
"""

import itertools

# itertools.count is thread-safe (C-level GIL atomic)
_id_counter = itertools.count(1)


def new_id() -> int:
    return next(_id_counter)


def new_token() -> str:
    return f"ID_{new_id()}"
