"""Tests for configuration loading."""

import pytest

from prlotto_core.config import _ENV_VARS, load_config, validate_config
from prlotto_core.errors import ConfigurationInvalid, ConfigurationMissing


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in list(_ENV_VARS.values()) + ["PRLOTTO_GITHUB_TOKEN", "GITHUB_TOKEN"]:
        monkeypatch.delenv(var, raising=False)


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github_org"] is None
    assert config["default_team"] is None
    assert config["with_avatar"] is False
    assert config["debug"] is False
    assert config["message"] == "Please review this."
    assert config["review_label"] == "awaiting review"
    assert config["stale_after_hours"] == 24.0
    assert config["reminder_interval_minutes"] == 60.0
    assert config["store"] == "memory"
    assert config["github_token"] is None


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text("github_org: acme\ndefault_team: reviewers\nstale_after_hours: 3\nwith_avatar: true\n")
    config = load_config(config_path=str(cfg))
    assert config["github_org"] == "acme"
    assert config["default_team"] == "reviewers"
    assert config["stale_after_hours"] == 3.0
    assert config["with_avatar"] is True


def test_numeric_team_id_becomes_string(tmp_path):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text("default_team: 4242\n")
    assert load_config(config_path=str(cfg))["default_team"] == "4242"


def test_empty_config_file(tmp_path):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["review_label"] == "awaiting review"


def test_env_overrides_config_file(tmp_path, monkeypatch):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text("github_org: acme\nreview_label: needs review\n")
    monkeypatch.setenv("PRLOTTO_GITHUB_ORG", "globex")
    monkeypatch.setenv("PRLOTTO_DEBUG", "yes")
    monkeypatch.setenv("PRLOTTO_REMINDER_INTERVAL_MINUTES", "15")
    config = load_config(config_path=str(cfg))
    assert config["github_org"] == "globex"
    assert config["review_label"] == "needs review"
    assert config["debug"] is True
    assert config["reminder_interval_minutes"] == 15.0


@pytest.mark.parametrize("raw, expected", [("1", True), ("true", True), ("On", True), ("0", False), ("no", False)])
def test_bool_env_parsing(tmp_path, monkeypatch, raw, expected):
    monkeypatch.setenv("PRLOTTO_WITH_AVATAR", raw)
    assert load_config(config_path=str(tmp_path / "none.yml"))["with_avatar"] is expected


def test_cli_overrides_win(tmp_path, monkeypatch):
    monkeypatch.setenv("PRLOTTO_DEBUG", "false")
    config = load_config(config_path=str(tmp_path / "none.yml"), cli_overrides={"debug": True})
    assert config["debug"] is True


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text("github_org: acme\n")
    config = load_config(config_path=str(cfg), cli_overrides={"github_org": None})
    assert config["github_org"] == "acme"


def test_token_prefers_prlotto_variable(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_generic")
    monkeypatch.setenv("PRLOTTO_GITHUB_TOKEN", "ghp_specific")
    assert load_config(config_path=str(tmp_path / "none.yml"))["github_token"] == "ghp_specific"


def test_token_falls_back_to_github_token(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_generic")
    assert load_config(config_path=str(tmp_path / "none.yml"))["github_token"] == "ghp_generic"


def test_token_is_never_read_from_file(tmp_path):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text("github_token: ghp_in_repo\n")
    assert load_config(config_path=str(cfg))["github_token"] is None


def test_non_numeric_env_value_names_the_key(tmp_path, monkeypatch):
    monkeypatch.setenv("PRLOTTO_STALE_AFTER_HOURS", "abc")
    with pytest.raises(ConfigurationInvalid, match="stale_after_hours: 'abc'") as exc_info:
        load_config(config_path=str(tmp_path / "none.yml"))
    assert exc_info.value.key == "stale_after_hours"
    assert exc_info.value.value == "abc"


def test_empty_yaml_number_is_rejected(tmp_path):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text("reminder_interval_minutes:\n")
    with pytest.raises(ConfigurationInvalid, match="reminder_interval_minutes: None"):
        load_config(config_path=str(cfg))


@pytest.mark.parametrize(
    "body, key",
    [
        ("stale_after_hours: -1\n", "stale_after_hours"),
        ("stale_after_hours: .nan\n", "stale_after_hours"),
        ("reminder_interval_minutes: 0\n", "reminder_interval_minutes"),
        ("reminder_interval_minutes: true\n", "reminder_interval_minutes"),
    ],
)
def test_out_of_range_numbers_are_rejected(tmp_path, body, key):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text(body)
    with pytest.raises(ConfigurationInvalid) as exc_info:
        load_config(config_path=str(cfg))
    assert exc_info.value.key == key


def test_zero_stale_after_is_allowed(tmp_path):
    cfg = tmp_path / ".prlotto.yml"
    cfg.write_text("stale_after_hours: 0\n")
    assert load_config(config_path=str(cfg))["stale_after_hours"] == 0.0


# ---------------------------------------------------------------------------
# validate_config
# ---------------------------------------------------------------------------


def test_validate_passes_with_token_and_org():
    validate_config({"github_token": "ghp_x", "github_org": "acme"})


def test_validate_lists_every_missing_key():
    with pytest.raises(ConfigurationMissing) as exc_info:
        validate_config({"github_token": None, "github_org": ""})
    assert exc_info.value.missing == ["github_token", "github_org"]
    assert "github_token, github_org" in str(exc_info.value)


def test_validate_single_missing_key():
    with pytest.raises(ConfigurationMissing) as exc_info:
        validate_config({"github_token": "ghp_x"})
    assert exc_info.value.missing == ["github_org"]
