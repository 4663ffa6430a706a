"""Error taxonomy for campaign runs

Run-level errors abort a run before any job exists. Job-level errors are
recorded on the job that raised them and never reach sibling jobs.
"""


class AdGeniusError(Exception):
    """Base class for all campaign generator errors"""


class RunInProgress(AdGeniusError):
    """A run was submitted while another one is still active"""


class CredentialMissing(AdGeniusError):
    """No usable provider credential is selected"""


class CodecError(AdGeniusError):
    """Binary input could not be read or converted for transport"""


class AnalysisError(AdGeniusError):
    """Product analysis returned no usable structured output"""


class ContentRefused(AdGeniusError):
    """Image provider withheld the result for safety/policy reasons

    Attributes:
        finish_reason: Provider marker that triggered the refusal
    """

    def __init__(self, message: str, finish_reason: str = None):
        super().__init__(message)
        self.finish_reason = finish_reason


class GenerationError(AdGeniusError):
    """Image generation failed for a reason other than a refusal"""


class VideoError(AdGeniusError):
    """Video generation reached a terminal failure"""


class VideoRefused(VideoError):
    """Video provider filtered the input (e.g. likeness detection)

    Attributes:
        reasons: Filter reasons reported by the provider
    """

    def __init__(self, message: str, reasons=None):
        super().__init__(message)
        self.reasons = list(reasons or [])


class MissingProductImage(AdGeniusError):
    """A run was submitted without the mandatory primary product image"""
