import pytest
from pydantic import ValidationError

from config import AppSettings


def test_defaults_match_search_policy():
    settings = AppSettings()

    assert settings.embedder.model_name == "text-embedding-3-small"
    assert settings.embedder.dim == 1536
    assert settings.embedder.timeout_seconds == 12.0
    assert settings.search.default_limit == 60
    assert settings.search.max_limit == 120
    assert settings.search.default_min_similarity == 0.43
    assert settings.indexing.default_page_size == 80
    assert settings.semantic_search_enabled is False


def test_from_env_reads_credentials_and_flags():
    settings = AppSettings.from_env(
        {
            "OPENAI_API_KEY": "sk-live",
            "OPENAI_EMBED_DIM": "256",
            "NEXT_PUBLIC_SUPABASE_URL": "https://demo.supabase.co",
            "SUPABASE_ADMIN_KEY": "admin-key",
            "SEMANTIC_SEARCH_ENABLED": "true",
            "CRON_SECRET": "  s3cret  ",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.embedder.api_key == "sk-live"
    assert settings.embedder.dim == 256
    assert settings.vector_store.supabase_url == "https://demo.supabase.co"
    assert settings.vector_store.service_key == "admin-key"
    assert settings.semantic_search_enabled is True
    assert settings.cron_secret == "s3cret"
    assert settings.log_level == "DEBUG"


def test_from_env_prefers_service_role_key_and_ignores_blank_values():
    settings = AppSettings.from_env(
        {"SUPABASE_SERVICE_ROLE_KEY": "role-key", "SUPABASE_ADMIN_KEY": "admin-key", "OPENAI_API_KEY": "  "}
    )

    assert settings.vector_store.service_key == "role-key"
    assert settings.embedder.api_key is None
    assert settings.semantic_search_enabled is False


def test_settings_are_immutable():
    settings = AppSettings()

    with pytest.raises(ValidationError):
        settings.cron_secret = "changed"


def test_non_numeric_dimension_falls_back_to_default():
    settings = AppSettings.from_env({"OPENAI_EMBED_DIM": "large"})

    assert settings.embedder.dim == 1536


@pytest.mark.parametrize("requested,expected", [(None, 80), (0, 1), (-5, 1), (40, 40), (500, 200)])
def test_page_size_is_clamped_to_configured_bounds(requested, expected):
    assert AppSettings().indexing.clamp_page_size(requested) == expected
