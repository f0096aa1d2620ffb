"""Tests for the full extraction workflow."""

import ast
import json
from pathlib import Path

import pytest

from template_i18n.errors import ScanError, TraversalError, WriteError
from template_i18n.extract import Extractor, Message

TEMPLATE_PAGE = """<!DOCTYPE html>
<html>
<head><title>{{ T .Lang "Welcome" }}</title></head>
<body>
<h1>{{ i18n .Lang "Hello World" }}</h1>
<p>{{ t .Lang "This is a test" }}</p>
</body>
</html>"""

TEMPLATE_BUTTONS = """{{ i18n .Lang "Save" }}
{{ i18n .Lang "Cancel" }}
{{ i18n .Lang "Welcome" }}"""


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Two templates sharing one message."""
    root = tmp_path / "templates"
    root.mkdir()
    (root / "template1.html").write_text(TEMPLATE_PAGE, encoding="utf-8")
    (root / "template2.tmpl").write_text(TEMPLATE_BUTTONS, encoding="utf-8")
    return root


def _stub_calls(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    return [
        node.args[0].value
        for node in ast.walk(tree)
        if isinstance(node, ast.Call) and getattr(node.func, "id", None) == "_"
    ]


class TestExtractorConfig:
    """Tests for Extractor construction."""

    def test_fields(self) -> None:
        extractor = Extractor("/tmp", "out.json", "main", "i18n_stub.py", ".html", ".TMPL")
        assert extractor.root == "/tmp"
        assert extractor.out == "out.json"
        assert extractor.package == "main"
        assert extractor.stub_file == "i18n_stub.py"
        assert extractor.extensions == {".html", ".tmpl"}

    def test_no_extensions(self) -> None:
        extractor = Extractor("/tmp", "", "", "stub.py")
        assert extractor.extensions == frozenset()
        assert extractor.is_template("page.html") is False

    def test_is_template_case_insensitive(self) -> None:
        extractor = Extractor("", "", "", "", ".html", ".tmpl", ".gohtml")
        assert extractor.is_template("/path/to/template.HTML") is True
        assert extractor.is_template("/path/to/template.htm") is False


class TestExtract:
    """Tests for Extractor.extract."""

    def test_first_seen_order_and_positions(self, template_dir: Path, tmp_path: Path) -> None:
        extractor = Extractor(template_dir, "", "testpkg", tmp_path / "stub.py", ".html", ".tmpl")
        messages = extractor.extract()

        assert messages == [
            Message(id="Welcome", positions=["template1.html:3:25", "template2.tmpl:3:15"]),
            Message(id="Hello World", positions=["template1.html:5:19"]),
            Message(id="This is a test", positions=["template1.html:6:15"]),
            Message(id="Save", positions=["template2.tmpl:1:15"]),
            Message(id="Cancel", positions=["template2.tmpl:2:15"]),
        ]

    def test_extension_filter(self, template_dir: Path, tmp_path: Path) -> None:
        extractor = Extractor(template_dir, "", "main", tmp_path / "stub.py", ".tmpl")
        assert [m.id for m in extractor.extract()] == ["Save", "Cancel", "Welcome"]

    def test_nested_paths_are_relative(self, template_dir: Path, tmp_path: Path) -> None:
        nested = template_dir / "emails" / "reset"
        nested.mkdir(parents=True)
        (nested / "body.html").write_text('{{ T .Lang "Reset password" }}')

        extractor = Extractor(template_dir, "", "main", tmp_path / "stub.py", ".html")
        messages = {m.id: m.positions for m in extractor.extract()}
        assert messages["Reset password"] == ["emails/reset/body.html:1:12"]

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        extractor = Extractor("/nonexistent/directory", "", "test", tmp_path / "stub.py", ".html")
        with pytest.raises(TraversalError):
            extractor.extract()

    def test_dedup_counts_every_call_site(self, tmp_path: Path) -> None:
        root = tmp_path / "t"
        root.mkdir()
        for name in ("a.html", "b.html", "c.html"):
            (root / name).write_text('{{ T .Lang "Same" }} {{ T .Lang "Same" }}')

        messages = Extractor(root, "", "main", tmp_path / "s.py", ".html").extract()
        assert len(messages) == 1
        assert messages[0].positions == [
            "a.html:1:12",
            "a.html:1:33",
            "b.html:1:12",
            "b.html:1:33",
            "c.html:1:12",
            "c.html:1:33",
        ]


class TestRun:
    """Tests for Extractor.run (extract + both writers)."""

    def test_full_workflow(self, template_dir: Path, tmp_path: Path) -> None:
        json_out = tmp_path / "messages.json"
        stub_out = tmp_path / "pkg" / "i18n_stub.py"
        extractor = Extractor(template_dir, json_out, "testpkg", stub_out, ".html", ".tmpl")

        result = extractor.run()

        assert result.files_scanned == 2
        assert result.call_sites == 6
        assert len(result.messages) == 5
        assert result.written == [str(json_out), str(stub_out)]

        data = json.loads(json_out.read_text(encoding="utf-8"))
        assert [m["id"] for m in data["messages"]] == [
            "Welcome",
            "Hello World",
            "This is a test",
            "Save",
            "Cancel",
        ]
        assert '__package_name__ = "testpkg"' in stub_out.read_text(encoding="utf-8")
        assert _stub_calls(stub_out) == [m["id"] for m in data["messages"]]

    def test_two_distinct_one_repeated(self, tmp_path: Path) -> None:
        root = tmp_path / "t"
        root.mkdir()
        (root / "page.html").write_text(
            '{{ T .Lang "Title" }}\n{{ T .Lang "Body" }}\n{{ T .Lang "Title" }}\n'
        )
        json_out = tmp_path / "out.json"
        stub_out = tmp_path / "stub.py"

        Extractor(root, json_out, "main", stub_out, ".html").run()

        entries = json.loads(json_out.read_text())["messages"]
        assert len(entries) == 2
        assert entries[0] == {"id": "Title", "positions": ["page.html:1:12", "page.html:3:12"]}
        assert len(entries[1]["positions"]) == 1
        assert len(_stub_calls(stub_out)) == 2

    def test_idempotent_outputs(self, template_dir: Path, tmp_path: Path) -> None:
        outputs = []
        for run in ("first", "second"):
            json_out = tmp_path / f"{run}.json"
            stub_out = tmp_path / f"{run}.py"
            Extractor(template_dir, json_out, "main", stub_out, ".html", ".tmpl").run()
            outputs.append((json_out.read_bytes(), stub_out.read_bytes()))
        assert outputs[0] == outputs[1]

    def test_escaped_quote_round_trip(self, tmp_path: Path) -> None:
        root = tmp_path / "t"
        root.mkdir()
        (root / "q.html").write_text(r'{{ T .Lang "Say \"Hello\"" }}')
        stub_out = tmp_path / "stub.py"

        Extractor(root, "", "main", stub_out, ".html").run()

        assert r'_("Say \"Hello\"")' in stub_out.read_text()
        assert _stub_calls(stub_out) == ['Say "Hello"']

    def test_without_json_output(self, template_dir: Path, tmp_path: Path) -> None:
        stub_out = tmp_path / "gotext.py"
        result = Extractor(template_dir, "", "testpkg", stub_out, ".html").run()
        assert stub_out.is_file()
        assert result.written == [str(stub_out)]

    def test_no_outputs_after_traversal_failure(self, tmp_path: Path) -> None:
        json_out = tmp_path / "messages.json"
        stub_out = tmp_path / "stub.py"
        extractor = Extractor(tmp_path / "missing", json_out, "main", stub_out, ".html")
        with pytest.raises(TraversalError):
            extractor.run()
        assert not json_out.exists()
        assert not stub_out.exists()

    def test_json_failure_still_writes_stub(self, template_dir: Path, tmp_path: Path) -> None:
        json_out = tmp_path / "missing-dir" / "messages.json"
        stub_out = tmp_path / "stub.py"
        extractor = Extractor(template_dir, json_out, "main", stub_out, ".html")

        with pytest.raises(WriteError) as exc_info:
            extractor.run()

        assert stub_out.is_file()
        assert exc_info.value.details["path"] == str(json_out)
        assert len(exc_info.value.details["failures"]) == 1

    def test_both_failures_reported(self, template_dir: Path, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        extractor = Extractor(
            template_dir,
            tmp_path / "missing-dir" / "messages.json",
            "main",
            blocker / "stub.py",
            ".html",
        )
        with pytest.raises(WriteError) as exc_info:
            extractor.run()
        assert [f["path"] for f in exc_info.value.details["failures"]] == [
            str(tmp_path / "missing-dir" / "messages.json"),
            str(blocker / "stub.py"),
        ]

    def test_scan_error_propagates(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        root = tmp_path / "t"
        root.mkdir()
        (root / "page.html").write_text('{{ T .Lang "x" }}')

        def _boom(self: Path) -> bytes:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "read_bytes", _boom)
        with pytest.raises(ScanError, match="page.html"):
            Extractor(root, "", "main", tmp_path / "stub.py", ".html").extract()
