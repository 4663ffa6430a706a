"""Core system components"""

from .errors import (
    AdGeniusError,
    RunInProgress,
    CredentialMissing,
    CodecError,
    AnalysisError,
    MissingProductImage,
    ContentRefused,
    GenerationError,
    VideoError,
    VideoRefused
)
from .models import (
    ReferenceImage,
    ProductAnalysis,
    GenerationJob,
    GeneratedImage,
    GeneratedVideo,
    RunConfiguration
)
from .state import (
    JobStatus,
    RunStep,
    JobState,
    RunSnapshot,
    JobStateStore,
    apply_job_update,
    apply_progress_tick
)
# Don't import workflow here to avoid circular imports
# from .workflow import *

__all__ = [
    # Errors
    'AdGeniusError',
    'RunInProgress',
    'CredentialMissing',
    'CodecError',
    'AnalysisError',
    'MissingProductImage',
    'ContentRefused',
    'GenerationError',
    'VideoError',
    'VideoRefused',
    # Records
    'ReferenceImage',
    'ProductAnalysis',
    'GenerationJob',
    'GeneratedImage',
    'GeneratedVideo',
    'RunConfiguration',
    # State
    'JobStatus',
    'RunStep',
    'JobState',
    'RunSnapshot',
    'JobStateStore',
    'apply_job_update',
    'apply_progress_tick'
]
