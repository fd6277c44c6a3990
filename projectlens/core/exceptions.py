"""Exception hierarchy for project discovery."""


class ProjectLensError(Exception):
    """Base exception for project discovery errors"""


class ConversionError(ProjectLensError):
    """Object could not be converted into an attribute map"""


class InvalidFieldError(ProjectLensError):
    """A field in an attribute map has an unexpected type"""

    def __init__(self, path, expected: str, actual):
        self.path = tuple(path)
        self.expected = expected
        self.actual = type(actual).__name__
        super().__init__(
            f"{'.'.join(self.path)} accessor error: "
            f"{actual!r} is of the type {self.actual}, expected {expected}"
        )


class UpstreamError(ProjectLensError):
    """Error talking to the Kubernetes API"""

    def __init__(self, message: str, status: int = None):
        self.status = status
        super().__init__(message)
