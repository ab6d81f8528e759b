"""Service layer — definition resolution and the ServiceResult contract.

Services may import from domain, introspection, plugins, and config.
They must never import from commands or output.
"""
