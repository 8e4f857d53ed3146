"""Audit logging package."""

from bankcli.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
