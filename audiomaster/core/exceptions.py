"""Custom exceptions for the audio mastering application."""

from typing import List, Optional


class AudioMasterError(Exception):
    """Base exception for all audio mastering errors."""

    def __init__(self, message: str, details: str = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class MissingInputFileError(AudioMasterError):
    """Raised when a job is created for a file that does not exist."""

    def __init__(self, message: str, file_path: str = None, details: str = None):
        super().__init__(message, details)
        self.file_path = file_path


class ExternalProcessError(AudioMasterError):
    """Raised when an ffmpeg invocation fails to start or exits nonzero."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        output: str = "",
        details: str = None,
    ):
        super().__init__(message, details)
        self.command = command
        self.returncode = returncode
        self.output = output


class ProcessTimeoutError(ExternalProcessError):
    """Raised when an ffmpeg invocation outlives its deadline and is killed."""

    def __init__(
        self,
        message: str,
        timeout: float = None,
        command: Optional[List[str]] = None,
        output: str = "",
    ):
        super().__init__(message, command=command, output=output)
        self.timeout = timeout


class AnalysisError(ExternalProcessError):
    """Raised when the diagnostic analysis pass fails."""


class MasteringError(ExternalProcessError):
    """Raised when normal mastering fails; triggers the simplified fallback."""


class SimplifiedMasteringError(ExternalProcessError):
    """Raised when simplified mastering fails. Terminal for the job."""


class SettingsFileError(AudioMasterError):
    """Raised when a settings file cannot be read or has the wrong shape."""

    def __init__(self, message: str, file_path: str = None, details: str = None):
        super().__init__(message, details)
        self.file_path = file_path


class ConfigurationError(AudioMasterError):
    """Raised when there are configuration issues."""

    def __init__(self, message: str, parameter: str = None, details: str = None):
        super().__init__(message, details)
        self.parameter = parameter
