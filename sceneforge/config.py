"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    sceneforge_env: str = "development"
    sceneforge_log_level: str = "info"

    # Motif catalog (meta) and symbol manifest; empty meta path = packaged default
    motif_meta_path: str = ""
    motif_manifest_path: str = "assets/motifs/motifs.manifest.json"

    # Candidate generation
    default_candidates: int = 40

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
