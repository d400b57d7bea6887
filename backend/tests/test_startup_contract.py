"""Guards for backend container startup behavior."""

import os
import stat
import subprocess
import tempfile
from pathlib import Path


def _backend_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _write_executable(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def _run_start_script(
    *,
    seed_on_startup: str,
    uv_should_fail: bool,
    port: str | None = None,
) -> tuple[subprocess.CompletedProcess[str], str]:
    backend_root = _backend_root()
    script = backend_root / "scripts" / "start.sh"

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        fake_bin = temp_path / "bin"
        fake_bin.mkdir(parents=True, exist_ok=True)
        log_path = temp_path / "calls.log"

        _write_executable(
            fake_bin / "alembic",
            "#!/bin/sh\n"
            'echo "alembic $*" >> "$FAKE_STARTUP_LOG"\n'
            "exit 0\n",
        )
        _write_executable(
            fake_bin / "uv",
            "#!/bin/sh\n"
            'echo "uv $*" >> "$FAKE_STARTUP_LOG"\n'
            'if [ "${FAKE_UV_SHOULD_FAIL:-0}" = "1" ]; then\n'
            "  exit 1\n"
            "fi\n"
            "exit 0\n",
        )
        _write_executable(
            fake_bin / "uvicorn",
            "#!/bin/sh\n"
            'echo "uvicorn $*" >> "$FAKE_STARTUP_LOG"\n'
            "exit 0\n",
        )

        env = os.environ.copy()
        env.pop("PORT", None)
        env.update(
            {
                "PATH": f"{fake_bin}:{env.get('PATH', '')}",
                "FAKE_STARTUP_LOG": str(log_path),
                "FAKE_UV_SHOULD_FAIL": "1" if uv_should_fail else "0",
                "SEED_ON_STARTUP": seed_on_startup,
                "UVICORN_RELOAD": "false",
            }
        )
        if port is not None:
            env["PORT"] = port
        completed = subprocess.run(
            ["sh", str(script)],
            cwd=str(backend_root),
            env=env,
            capture_output=True,
            text=True,
            check=False,
            timeout=10,
        )

        log_output = ""
        if log_path.exists():
            log_output = log_path.read_text(encoding="utf-8")

    return completed, log_output


def test_start_script_runs_migrations_before_server() -> None:
    script = (_backend_root() / "scripts" / "start.sh").read_text(encoding="utf-8")
    migration_command = "alembic upgrade head"
    uvicorn_exec = "exec uvicorn main:app"

    assert migration_command in script
    assert uvicorn_exec in script
    assert script.index(migration_command) < script.index(uvicorn_exec)


def test_start_script_defaults_to_original_port_without_seeding() -> None:
    completed, log_output = _run_start_script(
        seed_on_startup="false",
        uv_should_fail=False,
    )

    assert completed.returncode == 0
    assert "alembic upgrade head" in log_output
    assert "uv run python scripts/seed.py" not in log_output
    assert "uvicorn main:app --host 0.0.0.0 --port 3000" in log_output


def test_start_script_keeps_startup_alive_when_seed_fails() -> None:
    completed, log_output = _run_start_script(
        seed_on_startup="true",
        uv_should_fail=True,
        port="8080",
    )

    assert completed.returncode == 0
    assert "uv run python scripts/seed.py" in log_output
    assert "uvicorn main:app --host 0.0.0.0 --port 8080" in log_output
    assert "Seeding failed" in completed.stderr


def test_dockerfile_uses_single_startup_script() -> None:
    dockerfile = (_backend_root() / "Dockerfile").read_text(encoding="utf-8")
    assert 'CMD ["./scripts/start.sh"]' in dockerfile
