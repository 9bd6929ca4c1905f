"""Tests for the source reader: parsing, tolerance, discovery order."""

import json

import pytest

from mcpadmin.core.errors import ConfigParseError, IoError
from mcpadmin.mcp.sources import (
    SourceId,
    load_local_document,
    load_sources,
    read_document,
    server_map,
)


class TestSourceId:
    def test_str(self):
        assert str(SourceId.global_("/p")) == "global//p"
        assert str(SourceId.local("/work/app")) == "local//work/app"

    def test_global_sorts_first(self):
        ids = [SourceId.local("/a"), SourceId.global_("/z"), SourceId.global_("/b")]
        assert sorted(ids) == [SourceId.global_("/b"), SourceId.global_("/z"), SourceId.local("/a")]

    def test_substring_match(self):
        sid = SourceId.global_("/home/me/votingmachine")
        assert sid.matches("voting")
        assert sid.matches("/home/me")
        assert not sid.matches("other")

    def test_kind_prefix_pins_kind(self):
        g = SourceId.global_("/home/me/app")
        l = SourceId.local("/home/me/app")
        assert g.matches("global/app") and not l.matches("global/app")
        assert l.matches("local//home/me") and not g.matches("local//home/me")

    def test_hashable_equality(self):
        assert {SourceId.local("/x"): 1}[SourceId.local("/x")] == 1
        assert SourceId.local("/x") != SourceId.global_("/x")


class TestReadDocument:
    def test_missing_file(self, tmp_path):
        assert read_document(tmp_path / "nope.json") is None

    def test_reads_object(self, tmp_path):
        path = tmp_path / "a.json"
        path.write_text(json.dumps({"mcpServers": {}}))
        assert read_document(path) == {"mcpServers": {}}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"mcpServers": ')
        with pytest.raises(ConfigParseError) as exc:
            read_document(path)
        assert exc.value.path == path
        assert "line 1" in exc.value.cause

    def test_non_object_root(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigParseError, match="object"):
            read_document(path)

    def test_directory_is_io_error(self, tmp_path):
        (tmp_path / "dir.json").mkdir()
        with pytest.raises(IoError):
            read_document(tmp_path / "dir.json")

    def test_duplicate_keys_last_wins(self, tmp_path):
        path = tmp_path / "dup.json"
        path.write_text('{"mcpServers": {"x": {"cmd": "a"}, "x": {"cmd": "b"}}}')
        assert read_document(path)["mcpServers"]["x"] == {"cmd": "b"}


class TestServerMap:
    def test_absent_key(self, tmp_path):
        assert server_map({"other": 1}, tmp_path) == {}

    def test_preserves_document_order(self, tmp_path):
        doc = {"mcpServers": {"z": {}, "a": {}, "m": {}}}
        assert list(server_map(doc, tmp_path)) == ["z", "a", "m"]

    def test_non_object_servers(self, tmp_path):
        with pytest.raises(ConfigParseError, match="mcpServers"):
            server_map({"mcpServers": []}, tmp_path)

    def test_non_object_definition(self, tmp_path):
        with pytest.raises(ConfigParseError, match="'x'"):
            server_map({"mcpServers": {"x": "npx"}}, tmp_path)

    def test_definitions_are_frozen(self, tmp_path):
        servers = server_map({"mcpServers": {"x": {"cmd": "a"}}}, tmp_path)
        with pytest.raises(TypeError):
            servers["x"]["cmd"] = "b"


class TestLoadSources:
    def test_nothing_on_disk(self, ws):
        sources = load_sources(ws.config())
        assert sources.documents == []
        assert sources.local_document is None
        assert sources.local_path == ws.local_path

    def test_global_then_local_sorted_by_path(self, ws):
        b = ws.project_dir("b")
        a = ws.project_dir("a")
        ws.write_global(
            {
                str(b): {"mcpServers": {"x": {"cmd": "b"}}},
                str(a): {"mcpServers": {"x": {"cmd": "a"}}},
            }
        )
        ws.write_local({"x": {"cmd": "local-b"}}, project=b)
        ws.write_local({"x": {"cmd": "local-a"}}, project=a)

        ids = [d.source_id for d in load_sources(ws.config()).documents]
        assert ids == [
            SourceId.global_(str(a)),
            SourceId.global_(str(b)),
            SourceId.local(str(a)),
            SourceId.local(str(b)),
        ]

    def test_current_project_local_always_read(self, ws):
        ws.write_local({"mine": {"cmd": "x"}}, other="kept")
        sources = load_sources(ws.config())
        assert [d.source_id for d in sources.documents] == [SourceId.local(str(ws.project))]
        assert sources.local_document == {"other": "kept", "mcpServers": {"mine": {"cmd": "x"}}}

    def test_project_without_servers_contributes_nothing(self, ws):
        p = ws.project_dir("p")
        ws.write_global({str(p): {"allowedTools": []}})
        assert load_sources(ws.config()).documents == []

    def test_missing_local_files_tolerated(self, ws):
        ws.write_global({"/does/not/exist": {"mcpServers": {"x": {"cmd": "a"}}}})
        docs = load_sources(ws.config()).documents
        assert [d.source_id for d in docs] == [SourceId.global_("/does/not/exist")]

    def test_malformed_local_aborts(self, ws):
        p = ws.project_dir("p")
        ws.write_global({str(p): {}})
        (p / ".mcp.json").write_text("{oops")
        with pytest.raises(ConfigParseError) as exc:
            load_sources(ws.config())
        assert exc.value.path == p / ".mcp.json"

    def test_malformed_projects(self, ws):
        ws.write(ws.global_path, {"projects": ["nope"]})
        with pytest.raises(ConfigParseError, match="projects"):
            load_sources(ws.config())

    def test_global_document_path(self, ws):
        p = ws.project_dir("p")
        ws.write_global({str(p): {"mcpServers": {"x": {}}}})
        (doc,) = load_sources(ws.config()).documents
        assert doc.path == ws.global_path


class TestLoadLocalDocument:
    def test_missing(self, ws):
        assert load_local_document(ws.config()) is None

    def test_reads_current_only(self, ws):
        ws.write_global("not even read")
        ws.write_local({"x": {"cmd": "a"}})
        assert load_local_document(ws.config())["mcpServers"] == {"x": {"cmd": "a"}}

    def test_validates_servers(self, ws):
        ws.write(ws.local_path, {"mcpServers": {"x": 3}})
        with pytest.raises(ConfigParseError):
            load_local_document(ws.config())
