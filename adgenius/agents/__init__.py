"""Agent implementations for the campaign generation workflow"""

# Import base utilities
from .base import format_time, log_context, clean_json_response

# Import gateway contracts
from .gateway import ProviderGateway, CredentialGate, EnvCredentialGate, GeminiGateway

# Import system agents
from .system.job_orchestrator import CampaignOrchestrator


__all__ = [
    # Utility functions
    'format_time',
    'log_context',
    'clean_json_response',
    # Gateway
    'ProviderGateway',
    'CredentialGate',
    'EnvCredentialGate',
    'GeminiGateway',
    # System agents
    'CampaignOrchestrator'
]
