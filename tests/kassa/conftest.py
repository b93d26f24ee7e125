"""
Pytest configuration for kassa tests.

Provides the tenant scopes most tests run under.
"""

import pytest

from kassa.application.context import TenantContext
from tests.shared.fixtures.factories import TestTenantFactory


@pytest.fixture
def tenant() -> TenantContext:
    """Provide the default tenant scope."""
    return TestTenantFactory.default()


@pytest.fixture
def other_tenant() -> TenantContext:
    """Provide a second tenant (isolation testing)."""
    return TestTenantFactory.other()
