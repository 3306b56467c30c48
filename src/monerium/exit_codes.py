"""Numeric process exit codes used by the ``monerium`` command-line tool.

Each constant maps to an error category and is referenced by the
corresponding :class:`~monerium.exceptions.MoneriumError` subclass, so
shell scripts can branch on the failure class without parsing stderr.

Example::

    $ monerium tokens
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the API rejected the bearer token
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with arguments that match no supported grant or operation."""

EXIT_AUTH_FAILURE = 3
"""The API answered 401 or 403."""

EXIT_NOT_FOUND = 4
"""The requested resource was not found (HTTP 404)."""

EXIT_API_ERROR = 5
"""The API answered with any other non-2xx status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_MALFORMED_RESPONSE = 7
"""The API answered with a body that is not valid JSON."""
