"""
Error types raised by the cmdx translators.

Every error derives from :class:`TranslationError` so callers (the CLI,
the interactive shell) can catch the whole family in one place.
"""


class TranslationError(Exception):
    """Base class for all translation failures."""


class EmptyCommand(TranslationError):
    def __init__(self):
        super().__init__("Empty command provided")


class EmptyPath(TranslationError):
    def __init__(self):
        super().__init__("Empty path provided")


class CommandNotFound(TranslationError):
    """No rule, passthrough or fallback applies to *verb*."""

    def __init__(self, verb: str):
        self.verb = verb
        super().__init__(f"No translation found for command '{verb}'")


class InvalidOs(TranslationError):
    """A string entry point was given an OS name it cannot parse."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid operating system: '{name}'")


class NotPackageManagerCommand(TranslationError):
    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Not a recognized package manager command: '{command}'")


class UnsupportedOperation(TranslationError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Operation '{operation}' not supported by target package manager"
        )


class SameOs(TranslationError):
    # Never raised: same-OS requests short-circuit to a passthrough result.
    def __init__(self):
        super().__init__("Source and target OS are the same")
