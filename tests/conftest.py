# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest

from greendex.calculation import DEFAULT_EMISSION_MODEL
from greendex.config import get_emission_model, reset_config


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Every test starts from a fresh, environment-free configuration."""
    for name in ("GREENDEX_EMISSION_MODEL", "GREENDEX_EMISSION_MODEL_PATH", "GREENDEX_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="session")
def data_dir():
    """Get the bundled emission model directory."""
    return Path(__file__).parent.parent / "greendex" / "data" / "emission_models"


@pytest.fixture
def default_model():
    return DEFAULT_EMISSION_MODEL


@pytest.fixture
def erasmus_model():
    return get_emission_model("erasmus-2025")


@pytest.fixture
def scenario_answers():
    """Questionnaire answers of the reference end-to-end scenario."""
    return {
        "trainKm": 250,
        "busKm": 45.5,
        "days": 3,
        "accommodationCategory": "3★ Hotel",
        "roomOccupancy": "2 people",
        "electricity": "green energy",
        "food": "sometimes",
    }


@pytest.fixture
def project_activities():
    """Project baseline rows as they come out of storage (string distances)."""
    return [
        {"activityType": "bus", "distanceKm": "120.5"},
        {"activityType": "train", "distanceKm": "300"},
        {"activityType": "boat", "distanceKm": "40"},
    ]


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON document to a temporary file and return its path."""
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path
    return _write
