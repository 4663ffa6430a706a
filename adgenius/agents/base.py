"""
Shared helpers for the analysis and generation agents
"""

import re
from typing import Optional

_CODE_FENCE = re.compile(r"^```(?:json|JSON)?\s*(.*?)\s*```$", re.DOTALL)


def format_time(seconds: float) -> str:
    """Format time in seconds to minutes and seconds"""
    minutes = int(seconds // 60)
    remaining_seconds = seconds % 60
    if minutes > 0:
        return f"{minutes}m {remaining_seconds:.1f}s"
    return f"{remaining_seconds:.1f}s"


def log_context(run_id: Optional[str], job_id: Optional[int] = None) -> str:
    """Run/job prefix for log lines, e.g. "run=1a2b3c4d job=3" """
    context = f"run={run_id or '-'}"
    if job_id is not None:
        context += f" job={job_id}"
    return context


def clean_json_response(response_text: str) -> str:
    """
    Reduce a model response to the JSON document it carries

    Structured output is usually bare JSON, but some responses arrive wrapped
    in a ```json fence, with prose around the object, or with a stray closing
    brace at the end.

    Args:
        response_text: Raw model text

    Returns:
        JSON string ready for json.loads
    """
    text = response_text.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)

    # Drop any lead-in prose before the object
    start = text.find("{")
    if start > 0:
        text = text[start:]

    # Trailing braces only on a clear imbalance, at most 3
    for _ in range(3):
        if text.count("}") <= text.count("{") or not text.endswith("}"):
            break
        text = text[:-1].rstrip()

    return text.strip()
