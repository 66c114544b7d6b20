from __future__ import annotations


class SubmitError(RuntimeError):
    """Base class for every failure that terminates an invocation."""


class UsageError(SubmitError):
    pass


class SubmitEnvironmentError(SubmitError):
    pass


class ProjectRootNotFound(SubmitEnvironmentError):
    pass


class DestinationMissingError(SubmitEnvironmentError):
    pass


class UnknownHostError(SubmitEnvironmentError):
    pass


class MissingFilesError(SubmitError):
    def __init__(self, message: str, missing: list[str]) -> None:
        super().__init__(f"{message}: {', '.join(missing)}")
        self.missing = list(missing)


class StagingError(SubmitError):
    pass
