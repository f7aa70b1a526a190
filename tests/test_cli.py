import json

import pytest

import causemap.__main__ as cli
from causemap.data import REFERENCE_HIERARCHY
from causemap.hierarchy import hierarchy_to_dict


def test_main_writes_json_snapshot(tmp_path):
    out_path = tmp_path / "out" / "layout.json"

    cli.main(["--format", "json", "--settle", "--output", str(out_path)])

    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["canvas"] == {"width": 2400.0, "height": 1000.0}
    assert len(data["nodes"]) == 50
    assert data["nodes"][0]["label"] == "Inspiration Blockage"


def test_main_reads_hierarchy_file(tmp_path, capsys):
    source = tmp_path / "map.json"
    trees = hierarchy_to_dict(REFERENCE_HIERARCHY)[:1]
    source.write_text(json.dumps(trees), encoding="utf-8")

    cli.main([str(source), "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert out.startswith("view zoom=1.000")
    assert 't0 "Inspiration Blockage" (580.0, 500.0) r=110' in out
    assert "t1" not in out


def test_main_renders_tikz_document(tmp_path, monkeypatch):
    rendered = []

    def _generate(layout):
        rendered.append(len(layout.node_ids()))
        return "tikz document"

    monkeypatch.setattr(cli, "generate_tikz_document", _generate)
    out_path = tmp_path / "map.tex"

    cli.main(["--format", "tikz", "--output", str(out_path)])

    assert out_path.read_text(encoding="utf-8") == "tikz document"
    assert rendered == [50]


def test_main_exits_on_invalid_input(tmp_path):
    source = tmp_path / "bad.json"
    source.write_text(json.dumps([{"label": "Root", "x": "left", "y": 1}]), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(source)])
    assert excinfo.value.code == 1

    with pytest.raises(SystemExit):
        cli.main([str(tmp_path / "missing.json")])


def test_main_exits_when_subs_is_not_a_list(tmp_path, caplog):
    source = tmp_path / "bad_subs.json"
    tree = {"label": "Root", "x": 500, "y": 500, "causes": [{"label": "Cause", "subs": 3}]}
    source.write_text(json.dumps([tree]), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(source)])
    assert excinfo.value.code == 1
    assert "subs must be a list" in caplog.text
