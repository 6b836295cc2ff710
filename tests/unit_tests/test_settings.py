import pytest
from pydantic import ValidationError

from notes_api.config.settings import Settings


def make(**values) -> Settings:
    return Settings(_env_file=None, **values)


def test_local_modes_point_at_moto(monkeypatch):
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("AWS_ACCESS_KEY_ID", raising=False)
    monkeypatch.delenv("AWS_SECRET_ACCESS_KEY", raising=False)

    settings = make(deployment_mode="local-dev")

    assert settings.aws_endpoint_url == "http://localhost:5000"
    assert settings.aws_access_key_id == "mock"
    assert settings.s3_public_url == f"http://localhost:5000/{settings.s3_bucket_name}"


def test_prod_mode_uses_bucket_url(monkeypatch):
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)

    settings = make(deployment_mode="aws-prod", s3_bucket_name="notes", AWS_DEFAULT_REGION="eu-west-1")

    assert settings.aws_endpoint_url is None
    assert settings.s3_public_url == "https://notes.s3.eu-west-1.amazonaws.com"


def test_explicit_public_base_url_wins():
    settings = make(s3_public_base_url="https://cdn.example.com/files/")
    assert settings.s3_public_url == "https://cdn.example.com/files"


def test_legacy_mode_names_are_normalized():
    assert make(deployment_mode="cloud").deployment_mode == "aws-prod"
    assert make(deployment_mode="local-mock").deployment_mode == "local-dev"


@pytest.mark.parametrize(
    "field, value",
    [
        ("deployment_mode", "staging"),
        ("storage_backend", "cloud"),
        ("row_store", "postgres"),
        ("blob_store", "gcs"),
    ],
)
def test_rejects_unknown_choices(field, value):
    with pytest.raises(ValidationError):
        make(**{field: value})


def test_supabase_store_requires_credentials(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)

    with pytest.raises(ValidationError):
        make(row_store="supabase")

    settings = make(row_store="supabase", supabase_url="https://x.supabase.co", supabase_key="anon")
    assert settings.supabase_url == "https://x.supabase.co"


def test_supabase_credentials_not_needed_for_local_backend(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_KEY", raising=False)

    assert make(storage_backend="local", row_store="supabase").storage_backend == "local"


def test_reads_dotenv_from_working_directory(tmp_path, monkeypatch):
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("STORAGE_BACKEND=local\nTHEME_KEY=display\n")

    settings = Settings()

    assert settings.storage_backend == "local"
    assert settings.theme_key == "display"
