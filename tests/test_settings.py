"""
Tests for the settings store (climb/settings.py) and the /settings API endpoints.
"""

from __future__ import annotations

import pytest

from climb.settings import DEFAULTS, get_settings, reset_settings, update_settings


class TestSettingsDefaults:
    def test_get_settings_returns_all_defaults(self):
        s = get_settings()
        for key, val in DEFAULTS.items():
            assert s[key] == val

    def test_get_settings_returns_copy(self):
        s1 = get_settings()
        s1["session_reward_points"] = 9999
        assert get_settings()["session_reward_points"] == DEFAULTS["session_reward_points"]

    def test_defaults_contain_expected_keys(self):
        assert set(DEFAULTS.keys()) == {
            "session_reward_points",
            "session_reward_height",
            "distraction_penalty_per_minute",
            "distraction_penalty_mode",
        }


class TestUpdateSettings:
    def test_update_single_key(self):
        update_settings({"session_reward_points": 120})
        assert get_settings()["session_reward_points"] == 120

    def test_unknown_keys_are_ignored(self):
        update_settings({"unknown_key": "surprise", "session_reward_height": 60})
        s = get_settings()
        assert "unknown_key" not in s
        assert s["session_reward_height"] == 60

    def test_update_coerces_type(self):
        update_settings({"distraction_penalty_per_minute": 2.9})
        assert get_settings()["distraction_penalty_per_minute"] == 2

    def test_invalid_mode_rejected_atomically(self):
        with pytest.raises(ValueError):
            update_settings({"session_reward_points": 1, "distraction_penalty_mode": "triple"})
        s = get_settings()
        assert s["session_reward_points"] == DEFAULTS["session_reward_points"]
        assert s["distraction_penalty_mode"] == "double"

    def test_reset(self):
        update_settings({"session_reward_points": 1})
        assert reset_settings() == DEFAULTS


class TestSettingsEndpoints:
    async def test_get_settings_response_shape(self, client):
        r = await client.get("/settings")
        assert r.status_code == 200
        body = r.json()
        assert body["defaults"] == DEFAULTS
        assert body["settings"]["distraction_penalty_mode"] == "double"

    async def test_put_updates_mode(self, client):
        r = await client.put("/settings", json={"distraction_penalty_mode": "periodic"})
        assert r.status_code == 200
        assert r.json()["settings"]["distraction_penalty_mode"] == "periodic"

    async def test_put_empty_body_returns_200(self, client):
        r = await client.put("/settings", json={})
        assert r.status_code == 200

    async def test_put_unknown_mode_returns_422(self, client):
        r = await client.put("/settings", json={"distraction_penalty_mode": "triple"})
        assert r.status_code == 422

    async def test_put_negative_reward_returns_422(self, client):
        r = await client.put("/settings", json={"session_reward_points": -1})
        assert r.status_code == 422
