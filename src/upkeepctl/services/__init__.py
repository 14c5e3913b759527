"""Service layer: task operations returning ServiceResult.

Services may import from domain, infrastructure, and config.
They never import from commands or output.
"""
