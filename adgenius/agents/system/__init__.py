"""System agents for run orchestration"""

from .job_orchestrator import CampaignOrchestrator, settle_all

__all__ = [
    'CampaignOrchestrator',
    'settle_all'
]
