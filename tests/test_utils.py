"""Unit tests for utility and discovery helpers.

Tests cover:
- run_command (success, failure exit code, timeout, env vars)
- ensure_dir / write_text
- format_duration / check_mark
- discover_schema_documents / read_schema_document
- configure_logging
"""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from collection_registry.logging_config import configure_logging
from collection_registry.scanner import discover_schema_documents, read_schema_document
from collection_registry.utils import (
    check_mark,
    ensure_dir,
    format_duration,
    run_command,
    write_text,
)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.asyncio
    async def test_success(self):
        code, out, err = await run_command(["echo", "hello"])
        assert code == 0
        assert out == "hello"

    @pytest.mark.asyncio
    async def test_failure_exit_code(self):
        code, _, _ = await run_command("exit 3")
        assert code == 3

    @pytest.mark.asyncio
    async def test_env_vars(self):
        code, out, _ = await run_command("echo $REGISTRY_TEST_VAR", env={"REGISTRY_TEST_VAR": "42"})
        assert out == "42"

    @pytest.mark.asyncio
    async def test_timeout(self):
        code, _, err = await run_command(["sleep", "5"], timeout=0.1)
        assert code == -1
        assert "timed out" in err

    @pytest.mark.asyncio
    async def test_cwd(self, tmp_path: Path):
        _, out, _ = await run_command(["pwd"], cwd=tmp_path)
        assert Path(out).resolve() == tmp_path.resolve()


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestFileHelpers:
    def test_ensure_dir(self, tmp_path: Path):
        target = ensure_dir(tmp_path / "a" / "b")
        assert target.is_dir()
        assert ensure_dir(target) == target

    def test_write_text(self, tmp_path: Path):
        path = tmp_path / "x" / "y.ts"
        write_text(path, "export {};\n")
        assert path.read_text(encoding="utf-8") == "export {};\n"


class TestFormatting:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0.42, "0.4s"), (65.2, "1m 5s"), (-1, "0.0s"), (120, "2m 0s")],
    )
    def test_format_duration(self, seconds: float, expected: str):
        assert format_duration(seconds) == expected

    def test_check_mark(self):
        assert "yes" in check_mark(True)
        assert "no" in check_mark(False)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestDiscovery:
    def test_sorted_and_filtered(self, collections_dir: Path):
        (collections_dir / "README.md").write_text("docs", encoding="utf-8")
        (collections_dir / "nested").mkdir()

        names = [p.name for p in discover_schema_documents(collections_dir)]
        assert names == ["Articles.ts", "Media.ts", "Posts.ts"]

    def test_custom_extensions(self, collections_dir: Path):
        (collections_dir / "Legacy.js").write_text("slug: 'legacy'", encoding="utf-8")

        names = [p.name for p in discover_schema_documents(collections_dir, extensions=[".js"])]
        assert names == ["Legacy.js"]

    def test_missing_directory(self, tmp_path: Path):
        assert discover_schema_documents(tmp_path / "absent") == []

    def test_read_document(self, collections_dir: Path, posts_document: str):
        text, name = read_schema_document(collections_dir / "Posts.ts")
        assert name == "Posts.ts"
        assert text == posts_document

    def test_undecodable_bytes_replaced(self, tmp_path: Path):
        path = tmp_path / "Bad.ts"
        path.write_bytes(b"slug: 'bad' \xff\xfe")
        text, _ = read_schema_document(path)
        assert text.startswith("slug: 'bad'")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    def test_debug_events_filtered_by_default(self, capsys):
        configure_logging(debug=False)
        log = structlog.get_logger("test")
        log.debug("hidden_event")
        log.info("visible_event")

        err = capsys.readouterr().err
        assert "visible_event" in err
        assert "hidden_event" not in err

    def test_json_output(self, capsys):
        configure_logging(debug=True, json_output=True)
        structlog.get_logger("test").debug("json_event", identifier="posts")

        err = capsys.readouterr().err
        assert '"event": "json_event"' in err
        assert '"identifier": "posts"' in err
