# mirror <sysexits.h>
EXIT_OK = 0  # Normal success, including runs with no results
EXIT_GENERIC = 1  # Generic failure (fallback)
EXIT_DATAERR = 65  # Provider output could not be interpreted
EXIT_NOINPUT = 66  # Replay listing not found or unreadable
EXIT_UNAVAILABLE = 69  # Traversal command failed or is missing
EXIT_CONFIG = 78  # Invalid thresholds, options or settings file
