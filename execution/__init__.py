# Execution layer
"""Tool execution: models, safety, strategies and tools"""
