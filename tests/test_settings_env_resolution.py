"""
Tests pour la résolution des variables d'environnement.

Ce module teste le chargement et la résolution des variables d'environnement à partir de fichiers
.env personnalisés dans les settings.
"""

from __future__ import annotations

import importlib
from pathlib import Path

import pytest
from pydantic import ValidationError


def _reload_settings():
    settings_mod = importlib.import_module("cosmic.core.settings")
    return importlib.reload(settings_mod)


def test_settings_defaults(monkeypatch, tmp_path: Path) -> None:
    """Teste les valeurs par défaut sans fichier ni variable."""
    for key in ("ENV_FILE", "ASTRO_PRECISION", "ASTRO_INCLUDE_DOSHAS", "CHART_CACHE_ENABLED"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    s = _reload_settings().get_settings()
    assert s.APP_NAME == "cosmic-context"
    assert s.ASTRO_PRECISION == "standard"
    assert s.ASTRO_INCLUDE_DOSHAS is True
    assert s.CHART_CACHE_ENABLED is True


def test_settings_reads_env_file(tmp_path: Path, monkeypatch) -> None:
    """
    Teste que les settings lisent correctement les fichiers d'environnement.

    Vérifie que les variables définies dans un fichier .env personnalisé sont correctement
    chargées et appliquées aux settings.
    """
    env = tmp_path / ".env.custom"
    env.write_text("ASTRO_PRECISION=fast\nCHART_CACHE_ENABLED=false\n", encoding="utf-8")
    monkeypatch.delenv("ASTRO_PRECISION", raising=False)
    monkeypatch.delenv("CHART_CACHE_ENABLED", raising=False)
    monkeypatch.setenv("ENV_FILE", str(env))

    s = _reload_settings().get_settings()
    assert s.ASTRO_PRECISION == "fast"
    assert s.CHART_CACHE_ENABLED is False


def test_settings_prefers_app_env_file(tmp_path: Path, monkeypatch) -> None:
    """Teste la priorité de `.env.{APP_ENV}` sur `.env`."""
    (tmp_path / ".env").write_text("LOG_LEVEL=ERROR\n", encoding="utf-8")
    (tmp_path / ".env.test").write_text("LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.delenv("ENV_FILE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.chdir(tmp_path)

    s = _reload_settings().get_settings()
    assert s.LOG_LEVEL == "DEBUG"


def test_settings_rejects_unknown_precision(monkeypatch) -> None:
    """Teste qu'une précision inconnue est refusée à la lecture."""
    monkeypatch.setenv("ASTRO_PRECISION", "ultra")
    with pytest.raises(ValidationError):
        _reload_settings().get_settings()
