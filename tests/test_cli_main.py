from __future__ import annotations

import io
import json

import pytest

from rise_cli.cli.main import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    monkeypatch.delenv("RISE_HOST", raising=False)
    monkeypatch.delenv("RISE_DEFAULT_DOMAIN", raising=False)


def test_version_json_has_expected_fields(tmp_path) -> None:
    out = io.StringIO()
    err = io.StringIO()

    rc = main(
        ["--config", str(tmp_path / "missing.toml"), "version", "--json"],
        stdout=out,
        stderr=err,
    )

    assert rc == 0
    assert err.getvalue() == ""
    payload = json.loads(out.getvalue())
    assert payload["cli"] == "rise-cli"
    assert payload["host"] == "https://api.rise.sh"
    assert payload["default_domain"] == "rise.cloud"
    assert isinstance(payload["version"], str)


def test_version_text_reflects_config_file(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('host = "http://localhost:3000"\n', encoding="utf-8")
    out = io.StringIO()

    rc = main(["--config", str(config_path), "version"], stdout=out, stderr=io.StringIO())

    assert rc == 0
    assert "host: http://localhost:3000" in out.getvalue()


def test_invalid_config_is_reported(tmp_path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("host = \n", encoding="utf-8")
    err = io.StringIO()

    rc = main(["--config", str(config_path), "version"], stdout=io.StringIO(), stderr=err)

    assert rc == 1
    assert err.getvalue().startswith("config error:")


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        main([], stdout=io.StringIO(), stderr=io.StringIO())
