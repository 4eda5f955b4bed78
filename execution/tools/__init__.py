# Execution tools
"""Execution tools"""
from .base import BaseTool

__all__ = ["BaseTool"]
