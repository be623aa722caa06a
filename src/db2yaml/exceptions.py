"""Exceptions raised by db2yaml."""


class Db2YamlError(Exception):
    """Base class for db2yaml errors."""


class ExtractionError(Db2YamlError):
    """A catalog query failed during one extraction phase."""

    def __init__(self, phase: str, cause: BaseException):
        self.phase = phase
        self.cause = cause
        super().__init__(f"failed to load {phase}: {cause}")
