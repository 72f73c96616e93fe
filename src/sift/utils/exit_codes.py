"""
Exit codes for the sift CLI.

Scripts can branch on these to tell a missing task from a damaged file.
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
# Also used when a short id matches several tasks
ERROR_NOT_FOUND = 5
# The file could not be read or written, or its framing is invalid
ERROR_STORAGE = 7
# Framing is intact but the document inside cannot be decoded
ERROR_CORRUPT_DATA = 8

_DESCRIPTIONS = {
    SUCCESS: ("SUCCESS", "command completed"),
    ERROR_GENERAL: ("ERROR_GENERAL", "unexpected failure"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "invalid arguments"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "no single task matches the id"),
    ERROR_STORAGE: ("ERROR_STORAGE", "task file could not be read or written"),
    ERROR_CORRUPT_DATA: ("ERROR_CORRUPT_DATA", "task file is damaged"),
}


def describe_exit_code(code: int) -> str:
    """Return ``"NAME (description)"`` for an exit code, as written to the log."""
    name, description = _DESCRIPTIONS.get(code, (f"UNKNOWN({code})", "unknown exit code"))
    return f"{name} ({description})"
