"""MCP tool wrappers: JSON output for URL import and install errors."""

import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skill_fetch import server


def test_import_skill_url_tool():
    data = json.loads(asyncio.run(server.import_skill_url("https://github.com/acme/widgets/tree/main/skills/pdf")))
    assert data["name"] == "pdf"
    assert data["skill_path"] == "skills/pdf"
    assert data["source"] == "url-import"

    error = json.loads(asyncio.run(server.import_skill_url("https://example.com/nope")))
    assert error["error"] == "invalid_repo_url"


def test_install_tool_rejects_bad_url(tmp_path):
    data = json.loads(asyncio.run(server.install_skill("not-a-repo", str(tmp_path / "ws"))))
    assert data["success"] is False
    assert data["error_code"] == "invalid_repo_url"
    assert not (tmp_path / "ws").exists()
