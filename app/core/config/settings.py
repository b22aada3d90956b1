from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    upload_rate_limit: str
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_credentials: bool
    resume_db_path: str
    upload_tmp_dir: str
    max_upload_bytes: int
    min_extracted_chars: int
    min_job_description_chars: int
    blob_store: str
    blob_local_dir: str
    blob_s3_bucket: str | None
    blob_s3_prefix: str
    blob_s3_region: str | None


settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "100/15minutes") or "100/15minutes",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    upload_rate_limit=_get_env("UPLOAD_RATE_LIMIT", "10/hour") or "10/hour",
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", True),
    resume_db_path=_get_env("RESUME_DB_PATH", "data/resumes.db") or "data/resumes.db",
    upload_tmp_dir=_get_env("UPLOAD_TMP_DIR", "data/tmp") or "data/tmp",
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
    min_extracted_chars=_get_env_int("MIN_EXTRACTED_CHARS", 50),
    min_job_description_chars=_get_env_int("MIN_JOB_DESCRIPTION_CHARS", 50),
    blob_store=(_get_env("BLOB_STORE", "local") or "local").strip().lower(),
    blob_local_dir=_get_env("BLOB_LOCAL_DIR", "data/blobs") or "data/blobs",
    blob_s3_bucket=_get_env("BLOB_S3_BUCKET"),
    blob_s3_prefix=_get_env("BLOB_S3_PREFIX", "resumes") or "resumes",
    blob_s3_region=_get_env("BLOB_S3_REGION"),
)

if settings.blob_store not in {"local", "s3"}:
    raise RuntimeError("BLOB_STORE must be either 'local' or 's3'.")

if settings.blob_store == "s3" and not settings.blob_s3_bucket:
    raise RuntimeError("BLOB_STORE=s3 requires BLOB_S3_BUCKET to be set.")
