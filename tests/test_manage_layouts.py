"""Tests for the manage_layouts command line."""
import json

import pytest

import manage_layouts


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SLE_DATA_DIR", str(tmp_path))
    return tmp_path


def _run(capsys, *argv) -> tuple[int, str]:
    code = manage_layouts.main(list(argv))
    return code, capsys.readouterr().out


class TestCommands:
    def test_defaults_prints_layout(self, data_dir, capsys):
        code, out = _run(capsys, "defaults", "contact")
        assert code == 0
        assert [e["type"] for e in json.loads(out)] == [
            "HeaderNavigation", "Heading", "TextSection", "Heading", "TextSection",
        ]

    def test_provision_then_show(self, data_dir, capsys):
        code, _ = _run(capsys, "provision", "alice", "Alice's Goods")
        assert code == 0
        code, out = _run(capsys, "show", "alice", "home")
        assert code == 0
        assert json.loads(out)["type"] == "home"
        code, out = _run(capsys, "show", "alice")
        assert [p["type"] for p in json.loads(out)] == ["home", "catalog", "product", "contact"]

    def test_seed_is_repeatable(self, data_dir, capsys):
        assert _run(capsys, "seed")[0] == 0
        assert _run(capsys, "seed")[0] == 0
        assert _run(capsys, "show", manage_layouts.DEMO_OWNER, "catalog")[0] == 0

    def test_replace_accepts_props_key(self, data_dir, capsys):
        _run(capsys, "provision", "alice", "Alice's Goods")
        layout_file = data_dir / "layout.json"
        layout_file.write_text(json.dumps([
            {"id": "x", "type": "Heading", "variant": "text-only", "props": {"text": "Hi", "level": "h1"}},
        ]), encoding="utf-8")
        code, out = _run(capsys, "replace", "alice", "home", str(layout_file))
        assert code == 0
        assert json.loads(out) == [
            {"id": "x", "type": "Heading", "variant": "text-only", "settings": {"text": "Hi", "level": "h1"}},
        ]

    def test_reset(self, data_dir, capsys):
        _run(capsys, "provision", "alice", "Alice's Goods")
        code, out = _run(capsys, "reset", "alice", "contact")
        assert code == 0
        assert len(json.loads(out)) == 5

    def test_render_html(self, data_dir, capsys):
        _run(capsys, "provision", "alice", "Alice's Goods")
        code, _ = _run(capsys, "render", "home", "--owner", "alice", "--html")
        assert code == 0
        html = (data_dir / "output" / "preview_alice_home.html").read_text(encoding="utf-8")
        assert "Alice&#39;s Goods" in html

    def test_render_plan_json(self, data_dir, capsys):
        _run(capsys, "provision", "alice", "Alice's Goods")
        code, out = _run(capsys, "render", "catalog", "--owner", "alice")
        assert code == 0
        assert len(json.loads(out)["instructions"]) == 7


class TestExitCodes:
    def test_unknown_owner_exits_1(self, data_dir, capsys):
        assert _run(capsys, "show", "nobody", "home")[0] == 1

    def test_malformed_layout_exits_2(self, data_dir, capsys):
        _run(capsys, "provision", "alice", "Alice's Goods")
        layout_file = data_dir / "bad.json"
        layout_file.write_text(json.dumps({"not": "a list"}), encoding="utf-8")
        assert _run(capsys, "replace", "alice", "home", str(layout_file))[0] == 2

    def test_unknown_category_exits_2(self, data_dir, capsys):
        assert _run(capsys, "defaults", "blog")[0] == 2

    def test_duplicate_shop_exits_2(self, data_dir, capsys):
        _run(capsys, "provision", "alice", "Alice's Goods")
        assert _run(capsys, "provision", "alice", "Again")[0] == 2
