from __future__ import annotations

import io
import json

import pytest

from rise_cli.cli.main import main
from rise_cli.tr import T


@pytest.fixture(autouse=True)
def _workdir(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("RISE_HOST", raising=False)
    monkeypatch.delenv("RISE_DEFAULT_DOMAIN", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / "public").mkdir()


def _run(tmp_path, argv: list[str]) -> tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    rc = main(["--config", str(tmp_path / "missing.toml"), *argv], stdout=out, stderr=err)
    return rc, out.getvalue(), err.getvalue()


def _install_prompts(monkeypatch, answers: list[str]) -> list[str]:
    asked: list[str] = []
    pending = iter(answers)

    def fake_prompt(label: str, *, secret: bool = False, default: str | None = None) -> str:  # noqa: ARG001
        asked.append(label)
        return next(pending)

    monkeypatch.setattr("rise_cli.cli.main._prompt", fake_prompt)
    return asked


def test_init_saves_project(tmp_path) -> None:
    rc, out, err = _run(tmp_path, ["init", "--name", "my-site", "--path", "public"])

    assert rc == 0
    assert err == ""
    saved = json.loads((tmp_path / "rise.json").read_text(encoding="utf-8"))
    assert saved == {"name": "my-site", "path": "public"}
    assert T("project_initialized") % "my-site" in out
    assert "my-site.rise.cloud" in out


def test_init_uses_configured_base_domain(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("RISE_DEFAULT_DOMAIN", "test.dev")

    rc, out, _ = _run(tmp_path, ["init", "--name", "my-site", "--path", "public"])

    assert rc == 0
    assert "my-site.test.dev" in out


def test_init_refuses_existing_project(tmp_path) -> None:
    (tmp_path / "rise.json").write_text('{"name": "old", "path": "."}', encoding="utf-8")

    rc, _, err = _run(tmp_path, ["init", "--name", "my-site", "--path", "public"])

    assert rc == 1
    assert T("existing_rise_project") in err
    assert json.loads((tmp_path / "rise.json").read_text(encoding="utf-8"))["name"] == "old"


def test_init_falls_back_to_default_template(tmp_path) -> None:
    (tmp_path / "rise.default.json").write_text('{"path": "public"}', encoding="utf-8")

    rc, _, _ = _run(tmp_path, ["init", "--name", "my-site"])

    assert rc == 0
    saved = json.loads((tmp_path / "rise.json").read_text(encoding="utf-8"))
    assert saved["path"] == "public"


def test_init_prompts_for_missing_values(tmp_path, monkeypatch) -> None:
    asked = _install_prompts(monkeypatch, ["public", "prompted-site"])

    rc, _, _ = _run(tmp_path, ["init"])

    assert rc == 0
    assert asked == [T("enter_project_path"), T("enter_project_name")]
    saved = json.loads((tmp_path / "rise.json").read_text(encoding="utf-8"))
    assert saved == {"name": "prompted-site", "path": "public"}


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        (["--name", "Bad-Name", "--path", "public"], "lowercase letters"),
        (["--name", "ab", "--path", "public"], "minimum 3"),
        (["--name", "my-site", "--path", "missing"], "does not exist"),
        (["--name", "my-site", "--path", "/tmp"], "relative"),
    ],
)
def test_init_rejects_invalid_project(tmp_path, argv: list[str], message: str) -> None:
    rc, _, err = _run(tmp_path, ["init", *argv])

    assert rc == 1
    assert message in err
    assert not (tmp_path / "rise.json").exists()


def test_init_rejects_malformed_template(tmp_path) -> None:
    (tmp_path / "rise.default.json").write_text("{", encoding="utf-8")

    rc, _, err = _run(tmp_path, ["init", "--name", "my-site", "--path", "public"])

    assert rc == 1
    assert "invalid project file" in err


def test_init_rejects_undecodable_template(tmp_path) -> None:
    (tmp_path / "rise.default.json").write_bytes(b"\xff\xfe\x00")

    rc, _, err = _run(tmp_path, ["init", "--name", "my-site", "--path", "public"])

    assert rc == 1
    assert "invalid project file" in err
    assert not (tmp_path / "rise.json").exists()


def test_init_ignores_template_toggles_and_saves_identity_only(tmp_path) -> None:
    (tmp_path / "rise.default.json").write_text(
        '{"path": "public", "enable_stats": true, "force_https": true}',
        encoding="utf-8",
    )

    rc, _, _ = _run(tmp_path, ["init", "--name", "my-site"])

    assert rc == 0
    saved = json.loads((tmp_path / "rise.json").read_text(encoding="utf-8"))
    assert saved == {"name": "my-site", "path": "public"}


@pytest.mark.parametrize("flag", ["--enable-stats", "--force-https"])
def test_init_has_no_toggle_flags(tmp_path, flag: str) -> None:
    with pytest.raises(SystemExit):
        _run(tmp_path, ["init", "--name", "my-site", "--path", "public", flag])

    assert not (tmp_path / "rise.json").exists()


@pytest.mark.parametrize("command", ["info", "unlink"])
def test_undecodable_project_file_is_reported(tmp_path, command: str) -> None:
    (tmp_path / "rise.json").write_bytes(b"\xff\xfe\x00")

    rc, _, err = _run(tmp_path, [command])

    assert rc == 1
    assert "invalid project file" in err
    assert (tmp_path / "rise.json").exists()


def test_info_without_project(tmp_path) -> None:
    rc, _, err = _run(tmp_path, ["info"])

    assert rc == 1
    assert T("no_rise_project") in err


def test_info_json(tmp_path) -> None:
    (tmp_path / "rise.json").write_text('{"name": "my-site", "path": "public"}', encoding="utf-8")

    rc, out, _ = _run(tmp_path, ["info", "--json"])

    assert rc == 0
    assert json.loads(out) == {
        "default_domain": "my-site.rise.cloud",
        "name": "my-site",
        "path": "public",
    }


def test_info_text(tmp_path) -> None:
    (tmp_path / "rise.json").write_text('{"name": "my-site", "path": "public"}', encoding="utf-8")

    rc, out, _ = _run(tmp_path, ["info"])

    assert rc == 0
    assert "name: my-site" in out
    assert "default_domain: my-site.rise.cloud" in out


def test_unlink_removes_project_file(tmp_path) -> None:
    (tmp_path / "rise.json").write_text('{"name": "my-site", "path": "public"}', encoding="utf-8")

    rc, out, _ = _run(tmp_path, ["unlink"])

    assert rc == 0
    assert not (tmp_path / "rise.json").exists()
    assert T("project_unlinked") % "rise.json" in out


def test_unlink_without_project(tmp_path) -> None:
    rc, _, err = _run(tmp_path, ["unlink"])

    assert rc == 1
    assert T("no_rise_project") in err
