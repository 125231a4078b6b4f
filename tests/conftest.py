"""Test fixtures shaped like the MSAL-browser sample objects."""

from collections.abc import Generator
from typing import Any

import pytest

from msal_schema.config import settings
from msal_schema.observability.schema_metrics import get_schema_metrics
from samples import (
    ACCESS_TOKEN_V1,
    ACCOUNT,
    AZURE_EXTRAS,
    ID_TOKEN_V1,
    auth_response_dict,
    msal_config_dict,
)


@pytest.fixture
def account() -> dict[str, Any]:
    return dict(ACCOUNT)


@pytest.fixture
def msal_config() -> dict[str, Any]:
    return msal_config_dict()


@pytest.fixture
def auth_response() -> dict[str, Any]:
    return auth_response_dict()


@pytest.fixture
def access_token_v1() -> dict[str, Any]:
    return dict(ACCESS_TOKEN_V1)


@pytest.fixture
def access_token_v3() -> dict[str, Any]:
    return {**ACCESS_TOKEN_V1, **AZURE_EXTRAS}


@pytest.fixture
def id_token_v1() -> dict[str, Any]:
    return dict(ID_TOKEN_V1)


@pytest.fixture(autouse=True)
def reset_metrics() -> Generator[None, None, None]:
    """Give every test a clean metrics registry."""
    get_schema_metrics().reset()
    yield
    get_schema_metrics().reset()


@pytest.fixture
def strict_optional_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "strict_optional_fields", True)
