"""
CLI interface for template approval.

This package provides command-line interface components for submitting
and reviewing templates.
"""

from .approval import CLIApprovalHandler

__all__ = ["CLIApprovalHandler"]
