from __future__ import annotations

import io
import json

import pytest

from logmask.cli.mask_stream import main, mask_lines
from logmask.common.pii.masker import SensitiveDataMasker


def test_mask_lines_plain():
    out = io.StringIO()
    total = mask_lines(io.StringIO("password=abc\nplain\n\n"), out, SensitiveDataMasker())
    assert out.getvalue() == "****\nplain\n\n"
    assert total == 1


def test_mask_lines_without_masker_copies_input():
    out = io.StringIO()
    assert mask_lines(["token=abc\n"], out, None) == 0
    assert out.getvalue() == "token=abc\n"


def test_main_files(tmp_path):
    src = tmp_path / "app.log"
    dst = tmp_path / "out" / "app.masked.log"
    dst.parent.mkdir()
    src.write_text("user a@example.com logged in\nAuthorization: Bearer abc.def\n", encoding="utf-8")

    main(["--in", str(src), "--out", str(dst)])

    assert dst.read_text(encoding="utf-8") == "user **** logged in\nAuthorization: ****\n"


def test_main_json_lines(tmp_path):
    src = tmp_path / "events.jsonl"
    dst = tmp_path / "events.masked.jsonl"
    src.write_text(
        json.dumps({"user": "a@example.com", "n": 1}) + "\nnot json token=abc\n",
        encoding="utf-8",
    )

    main(["--in", str(src), "--out", str(dst), "--json"])

    first, second = dst.read_text(encoding="utf-8").splitlines()
    assert json.loads(first) == {"user": "****", "n": 1}
    assert second == "not json ****"


def test_main_profile_disabled(tmp_path):
    profile = tmp_path / "masking.yaml"
    profile.write_text("enabled: false\n", encoding="utf-8")
    src = tmp_path / "in.log"
    dst = tmp_path / "out.log"
    src.write_text("password=abc\n", encoding="utf-8")

    main(["--in", str(src), "--out", str(dst), "--profile", str(profile)])

    assert dst.read_text(encoding="utf-8") == "password=abc\n"


def test_main_profile_categories(tmp_path):
    profile = tmp_path / "masking.json"
    profile.write_text(json.dumps({"enabled": True, "maskEmails": False}), encoding="utf-8")
    src = tmp_path / "in.log"
    dst = tmp_path / "out.log"
    src.write_text("a@example.com password=abc\n", encoding="utf-8")

    main(["--in", str(src), "--out", str(dst), "--profile", str(profile)])

    assert dst.read_text(encoding="utf-8") == "a@example.com ****\n"


def test_main_stats_to_stderr(tmp_path, capsys):
    src = tmp_path / "in.log"
    src.write_text("a@example.com b@example.com\n", encoding="utf-8")

    main(["--in", str(src), "--stats"])

    captured = capsys.readouterr()
    assert captured.out == "**** ****\n"
    assert "[logmask] replacements=2" in captured.err


def test_main_invalid_profile_exits(tmp_path, capsys):
    profile = tmp_path / "bad.json"
    profile.write_text(json.dumps({"enabled": True, "maxDepth": -5}), encoding="utf-8")
    src = tmp_path / "in.log"
    src.write_text("password=abc\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["--in", str(src), "--profile", str(profile)])

    assert exc.value.code == 2
    captured = capsys.readouterr()
    assert "invalid masking config" in captured.err
    assert "password=abc" not in captured.out


def test_main_rejects_bad_depth():
    with pytest.raises(SystemExit) as exc:
        main(["--max-depth", "1000"])
    assert exc.value.code == 2


def test_main_env_settings(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOGMASK_PROFILE", raising=False)
    monkeypatch.setenv("LOGMASK_ENABLED", "true")
    monkeypatch.setenv("LOGMASK_MASK_SSNS", "false")
    src = tmp_path / "in.log"
    src.write_text("ssn 123-45-6789 token=abc\n", encoding="utf-8")

    main(["--in", str(src), "--env"])

    assert capsys.readouterr().out == "ssn 123-45-6789 ****\n"


def test_mask_lines_strips_crlf():
    out = io.StringIO()
    total = mask_lines(["token=abc\r\n", "plain\r\n"], out, SensitiveDataMasker())
    assert out.getvalue() == "****\nplain\n"
    assert total == 1


def test_main_missing_input_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--in", str(tmp_path / "absent.log")])

    assert exc.value.code == 2
    assert "[logmask] cannot open" in capsys.readouterr().err


def test_main_unwritable_output_exits(tmp_path, capsys):
    src = tmp_path / "in.log"
    src.write_text("password=abc\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["--in", str(src), "--out", str(tmp_path / "no-such-dir" / "out.log")])

    assert exc.value.code == 2
    assert "[logmask] cannot open" in capsys.readouterr().err
