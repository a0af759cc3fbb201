"""Domain services."""

from campusrbac.domain.services.scope_compiler import compile_scope

__all__ = ["compile_scope"]
