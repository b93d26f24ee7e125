"""Request-scoped context objects."""

from kassa.application.context.tenant_context import TenantContext

__all__ = ["TenantContext"]
