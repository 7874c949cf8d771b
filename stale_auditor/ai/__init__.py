"""AI agent for stale issue auditing."""

from .agents import AuditDeps, render_audit_prompt, stale_audit_agent
from .prompts import STALE_AUDIT_PROMPT

__all__ = [
    "AuditDeps",
    "STALE_AUDIT_PROMPT",
    "render_audit_prompt",
    "stale_audit_agent",
]
