import json
import os
import subprocess
import sys
from pathlib import Path

from topups.core.errors import NotFoundError, ParseError, ShapeError, ValidationError
from topups.main import _parse_args, main

PROJECT_ROOT = Path(__file__).resolve().parents[1]

COMPANIES = [{"id": 1, "name": "Acme", "top_up": 100, "email_status": True}]
USERS = [
    {
        "id": 1,
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "j@x.com",
        "company_id": 1,
        "email_status": True,
        "active_status": True,
        "tokens": 50,
    }
]


def _write_datasets(directory: Path, users: str, companies: str) -> None:
    (directory / "users.json").write_text(users, encoding="utf-8")
    (directory / "companies.json").write_text(companies, encoding="utf-8")


def test_parse_args_defaults_to_settings() -> None:
    args = _parse_args([])
    assert args.data_dir is None
    assert args.output is None
    assert args.log_level is None


def test_parse_args_accepts_overrides() -> None:
    args = _parse_args(["--data-dir", "fixtures", "--output", "out/report.txt", "--log-level", "debug"])
    assert args.data_dir == Path("fixtures")
    assert args.output == Path("out/report.txt")
    assert args.log_level == "debug"


def test_main_writes_report_and_returns_zero(tmp_path: Path) -> None:
    _write_datasets(tmp_path, json.dumps(USERS), json.dumps(COMPANIES))
    output = tmp_path / "output.txt"

    code = main(["--data-dir", str(tmp_path), "--output", str(output)])

    assert code == 0
    assert output.read_text(encoding="utf-8").startswith("\n\tCompany Id: 1\n")


def test_main_returns_distinct_exit_codes(tmp_path: Path) -> None:
    output = tmp_path / "output.txt"
    args = ["--data-dir", str(tmp_path), "--output", str(output)]

    assert main(args) == NotFoundError.exit_code

    _write_datasets(tmp_path, "{not json", json.dumps(COMPANIES))
    assert main(args) == ParseError.exit_code

    _write_datasets(tmp_path, "[]", json.dumps(COMPANIES))
    assert main(args) == ShapeError.exit_code

    _write_datasets(tmp_path, json.dumps([{"id": 1}]), json.dumps(COMPANIES))
    assert main(args) == ValidationError.exit_code

    assert not output.exists()


def test_exit_codes_are_distinct() -> None:
    codes = {NotFoundError.exit_code, ParseError.exit_code, ShapeError.exit_code, ValidationError.exit_code}
    assert len(codes) == 4
    assert 0 not in codes


def _run_cli(*args: str) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    env["COLUMNS"] = "240"
    env["NO_COLOR"] = "1"
    env.pop("FORCE_COLOR", None)
    env.pop("TOPUPS_LOG_DIR", None)
    return subprocess.run(
        [sys.executable, "-m", "topups", *args],
        capture_output=True,
        text=True,
        env=env,
        timeout=60,
    )


def test_cli_failure_message_reaches_stderr(tmp_path: Path) -> None:
    result = _run_cli("--data-dir", str(tmp_path / "missing"), "--output", str(tmp_path / "output.txt"))

    assert result.returncode == NotFoundError.exit_code
    assert "Report not written" in result.stderr
    assert "users does not exist" in result.stderr
    assert not (tmp_path / "output.txt").exists()


def test_cli_validation_failure_names_dataset(tmp_path: Path) -> None:
    _write_datasets(tmp_path, json.dumps(USERS), json.dumps([{"id": 1, "name": "Acme"}]))

    result = _run_cli("--data-dir", str(tmp_path), "--output", str(tmp_path / "output.txt"))

    assert result.returncode == ValidationError.exit_code
    assert "Invalid data found in companies.json" in result.stderr


def test_cli_success_writes_report(tmp_path: Path) -> None:
    _write_datasets(tmp_path, json.dumps(USERS), json.dumps(COMPANIES))
    output = tmp_path / "output.txt"

    result = _run_cli("--data-dir", str(tmp_path), "--output", str(output))

    assert result.returncode == 0
    assert result.stdout == ""
    assert "Top-up report complete" in result.stderr
    assert output.read_text(encoding="utf-8").endswith("\t\tTotal amount of top ups for Acme: 100\n\n")
