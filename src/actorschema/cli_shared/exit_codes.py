# topmark:header:start
#
#   project      : ActorSchema
#   file         : exit_codes.py
#   file_relpath : src/actorschema/cli_shared/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the ActorSchema CLI.

ActorSchema aligns with the BSD `sysexits` convention so that other tooling can
interpret failures consistently. Click's own usage errors exit with 2; tests
assert on the specific codes below.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the ActorSchema CLI.

    Attributes:
        SUCCESS: Successful execution; warnings do not change the exit code.
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        DATA_ERROR: Input data cannot be converted: unsupported member type,
            malformed schema JSON, or a tag value that is not a literal.
            Mirrors BSD ``EX_DATAERR (65)``.
        NOT_FOUND: A source file, declaration, schema file or manifest does not
            exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions (read/write). Mirrors BSD
            ``EX_NOPERM (77)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
