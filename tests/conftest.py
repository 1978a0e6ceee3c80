"""Test configuration and fixtures."""

import pytest
import structlog


def registry_line(
    town: str,
    town_kana: str,
    postal_code: str = "0330071",
    multi_town: int = 0,
    prefecture: str = "青森県",
    city: str = "上北郡六戸町",
    prefecture_kana: str = "ｱｵﾓﾘｹﾝ",
    city_kana: str = "ｶﾐｷﾀｸﾞﾝﾛｸﾉﾍﾏﾁ",
) -> str:
    """One KEN_ALL line in the registry's own column layout."""
    return (
        f'02405,"033  ","{postal_code}","{prefecture_kana}","{city_kana}","{town_kana}",'
        f'"{prefecture}","{city}","{town}",0,0,0,{multi_town},0,0\n'
    )


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


@pytest.fixture
def normalizer():
    from kenall.services.normalizer_service import RegistryNormalizer
    return RegistryNormalizer()


@pytest.fixture
def line():
    return registry_line
