#!/usr/bin/env python3
"""Print the Claude Code project index from the command line.

Usage:
  python -m ccviewer.scripts.list_projects
  python -m ccviewer.scripts.list_projects --root ~/.claude/projects --search api
  python -m ccviewer.scripts.list_projects --json
"""
from __future__ import annotations

import argparse
import json

from ccviewer.date_utils import millis_to_iso
from ccviewer.errors import IndexerError
from ccviewer.project_indexer import project_indexer
from ccviewer.search import filter_projects


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--root", default="", help="Log root (defaults to ~/.claude/projects)")
    parser.add_argument("--search", default="")
    parser.add_argument("--json", action="store_true")
    args = parser.parse_args(argv)

    try:
        root = args.root or project_indexer.default_log_root()
        projects = filter_projects(project_indexer.list_projects(root), args.search)
    except IndexerError as exc:
        print(exc.message)
        return 1

    if args.json:
        payload = {
            "root": root,
            "search": args.search or None,
            "project_count": len(projects),
            "projects": [p.model_dump() for p in projects],
        }
        print(json.dumps(payload, indent=2))
        return 0

    print(f"Root: {root}")
    if args.search:
        print(f"Search: {args.search}")
    print(f"Projects: {len(projects)}")
    print("")
    for idx, project in enumerate(projects, start=1):
        total_size = sum(entry.size for entry in project.files)
        print(
            f"{idx:02d}. {project.display_name} files={len(project.files)} "
            f"bytes={total_size} last={millis_to_iso(project.last_modified)}"
        )
        print(f"    folder={project.folder_name}")
        if project.working_directory:
            print(f"    cwd={project.working_directory}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
