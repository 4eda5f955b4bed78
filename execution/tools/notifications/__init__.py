# Notification tools
"""Notification tools"""
from .email import ResendEmailTool
from .sms import TwilioSmsTool

__all__ = [
    "ResendEmailTool",
    "TwilioSmsTool",
]
