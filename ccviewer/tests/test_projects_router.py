import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi import HTTPException

from ccviewer.errors import FileReadError
from ccviewer.project_indexer import ProjectIndexer
from ccviewer.routers import projects as projects_router


class ProjectsRouterTests(unittest.TestCase):
    def setUp(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.home = Path(tmpdir.name)
        self.root = self.home / ".claude" / "projects"
        self.root.mkdir(parents=True)

        patcher = patch.object(projects_router, "project_indexer", ProjectIndexer(env={"HOME": str(self.home)}))
        patcher.start()
        self.addCleanup(patcher.stop)

    def _write_log(self, relative_path: str, records: list[dict], mtime_ms: int) -> Path:
        path = self.root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(json.dumps(r) for r in records), encoding="utf-8")
        os.utime(path, ns=(mtime_ms * 1_000_000, mtime_ms * 1_000_000))
        return path

    def test_list_projects_returns_sorted_summaries(self) -> None:
        self._write_log("-home-alice-api/a.jsonl", [{"cwd": "/home/alice/api"}], 1_000)
        self._write_log("-home-alice-web/b.jsonl", [{"cwd": "/home/alice/web"}], 2_000)

        result = projects_router.list_projects(directory=str(self.root), search="")

        self.assertEqual([p.display_name for p in result], ["web", "api"])
        self.assertEqual(result[0].last_modified, 2_000)

    def test_list_projects_applies_search(self) -> None:
        self._write_log("-home-alice-api/agent-1.jsonl", [{"cwd": "/home/alice/api"}], 1_000)
        self._write_log("-home-alice-api/main.jsonl", [{}], 1_500)
        self._write_log("-home-alice-web/b.jsonl", [{"cwd": "/home/alice/web"}], 2_000)

        result = projects_router.list_projects(directory=str(self.root), search="agent")

        self.assertEqual([p.display_name for p in result], ["api"])
        self.assertEqual([f.name for f in result[0].files], ["agent-1.jsonl"])

    def test_list_projects_missing_root_is_404(self) -> None:
        missing = str(self.home / "missing")

        with self.assertRaises(HTTPException) as ctx:
            projects_router.list_projects(directory=missing, search="")

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.detail, f"Directory does not exist: {missing}")

    def test_list_projects_file_root_is_400(self) -> None:
        path = self._write_log("loose.jsonl", [{}], 1_000)

        with self.assertRaises(HTTPException) as ctx:
            projects_router.list_projects(directory=str(path), search="")

        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIn(str(path), ctx.exception.detail)

    def test_default_root(self) -> None:
        response = projects_router.get_default_root()

        self.assertEqual(response.path, str(self.root))

    def test_default_root_without_home_is_500(self) -> None:
        with patch.object(projects_router, "project_indexer", ProjectIndexer(env={})):
            with self.assertRaises(HTTPException) as ctx:
                projects_router.get_default_root()

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn("HOME", ctx.exception.detail)

    def test_default_root_missing_directory_is_404(self) -> None:
        other_home = self.home / "elsewhere"
        other_home.mkdir()

        with patch.object(projects_router, "project_indexer", ProjectIndexer(env={"HOME": str(other_home)})):
            with self.assertRaises(HTTPException) as ctx:
                projects_router.get_default_root()

        self.assertEqual(ctx.exception.status_code, 404)


class FilesRouterTests(unittest.TestCase):
    def setUp(self) -> None:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        self.dir = Path(tmpdir.name)
        self.path = self.dir / "session.jsonl"
        self.path.write_text(
            "\n".join(
                json.dumps(record)
                for record in [
                    {"type": "user", "uuid": "u-1", "timestamp": "2026-02-16T10:00:00Z", "message": {"content": "run tests"}},
                    {
                        "type": "assistant",
                        "uuid": "a-1",
                        "timestamp": "2026-02-16T10:00:03Z",
                        "message": {
                            "content": [{"type": "tool_use", "id": "t1", "name": "Bash", "input": {"command": "pytest"}}],
                            "usage": {"input_tokens": 3, "output_tokens": 4},
                        },
                    },
                ]
            ),
            encoding="utf-8",
        )

    def test_read_file_content(self) -> None:
        response = projects_router.read_file_content(path=str(self.path))

        self.assertEqual(response.path, str(self.path))
        self.assertEqual(response.content, self.path.read_text(encoding="utf-8"))

    def test_read_missing_file_is_404_with_path(self) -> None:
        missing = str(self.dir / "missing.jsonl")

        with self.assertRaises(HTTPException) as ctx:
            projects_router.read_file_content(path=missing)

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertIn(missing, ctx.exception.detail)

    def test_other_read_failures_are_500(self) -> None:
        error = FileReadError("Unable to read file x: denied", path="x", os_error=PermissionError(13, "denied"))

        with patch.object(projects_router.project_indexer, "read_file", side_effect=error):
            with self.assertRaises(HTTPException) as ctx:
                projects_router.read_file_content(path="x")

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.detail, "Unable to read file x: denied")

    def test_messages_endpoint_parses_and_searches(self) -> None:
        all_messages = projects_router.get_file_messages(path=str(self.path), search="")
        matched = projects_router.get_file_messages(path=str(self.path), search="BASH")

        self.assertEqual([m.id for m in all_messages], ["u-1", "a-1"])
        self.assertEqual([m.id for m in matched], ["a-1"])

    def test_stats_endpoint(self) -> None:
        stats = projects_router.get_file_stats(path=str(self.path))

        self.assertEqual(stats.total_messages, 2)
        self.assertEqual(stats.tool_usage, {"Bash": 1})
        self.assertEqual(stats.total_tokens.output, 4)
        self.assertEqual(stats.duration, 3_000)

    def test_stats_for_missing_file_is_404(self) -> None:
        with self.assertRaises(HTTPException) as ctx:
            projects_router.get_file_stats(path=str(self.dir / "nope.jsonl"))

        self.assertEqual(ctx.exception.status_code, 404)
