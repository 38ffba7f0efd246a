"""End-to-end tests for the CLI surface in main.py."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from main import main as main_entry
from tests.builders import doc, element, mention, paragraph, text

SCENE = doc(
    element("scene-heading", "INT. CORRIDOR - NIGHT"),
    element("action", "AVA KLINE, 30s, blood on her sleeve."),
    element("action", "She turns."),
)


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_project_prints_plain_text(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(tmp_path / "doc.json", doc(paragraph(text("A")), paragraph(text("B"))))

    exit_code = main_entry(["project", str(document)])

    assert exit_code == 0
    assert capsys.readouterr().out == "A\nB\n"


def test_project_positions_emits_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(
        tmp_path / "doc.json",
        doc(paragraph(text("Hi "), mention("AVA"))),
    )

    assert main_entry(["project", str(document), "--positions"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["text"] == "Hi AVA"
    assert payload["positions"][1] == {"offset": 3, "doc_position": 5, "mention_text_length": 3}


def test_map_prints_position_and_range(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(
        tmp_path / "doc.json",
        doc(paragraph(text("Hello "), mention("BADGER"), text(", she said."))),
    )

    assert main_entry(["map", str(document), "8"]) == 0
    assert capsys.readouterr().out.strip() == "8"

    assert main_entry(["map", str(document), "0", "--length", "5"]) == 0
    assert json.loads(capsys.readouterr().out) == {"from": 1, "to": 6}


def test_block_ids_writes_output(tmp_path: Path) -> None:
    document = _write_json(tmp_path / "doc.json", doc(paragraph(text("A")), paragraph(text("B"))))
    output = tmp_path / "out.json"

    assert main_entry(["block-ids", str(document), "--output", str(output)]) == 0

    payload = json.loads(output.read_text(encoding="utf-8"))
    ids = [block["attrs"]["blockId"] for block in payload["content"]]
    assert len(set(ids)) == 2


def test_context_renders_prompt_block(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(tmp_path / "scene.json", SCENE)

    # The second action's text runs from 62 to 72.
    assert main_entry(["context", str(document), "--from", "62", "--to", "72"]) == 0

    output = capsys.readouterr().out
    assert "SCENE LOCATION: INT. CORRIDOR - NIGHT" in output
    assert "- AVA KLINE: 30s, blood on her sleeve." in output
    assert '- "She" = AVA KLINE (30s, blood on her sleeve.)' in output
    assert output.rstrip().endswith("PRECEDING ACTION (for context):\nAVA KLINE, 30s, blood on her sleeve.")


def test_prompt_uses_registry_notes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(
        tmp_path / "scene.json",
        doc(element("action", mention("AVA", mention_id="c1"), " lifts the lamp.")),
    )
    registry = tmp_path / "registry.yaml"
    registry.write_text(
        yaml.safe_dump(
            {
                "characters": [{"id": "c1", "name": "AVA", "noteDocumentId": "n1"}, {"name": "nameless"}],
                "notes": {"n1": doc(paragraph(text("## Appearance")), paragraph(text("Tall, grey eyes, scar on cheek.")))},
            }
        ),
        encoding="utf-8",
    )

    assert main_entry(["prompt", str(document), "--registry", str(registry), "--from", "1", "--to", "18"]) == 0

    output = capsys.readouterr().out
    assert output.startswith("AVA lifts the lamp.\n")
    assert "- AVA (CHARACTER VISUAL): Tall, grey eyes, scar on cheek." in output


def test_prompt_rejects_empty_selection(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(tmp_path / "scene.json", SCENE)

    assert main_entry(["prompt", str(document), "--from", "5"]) == 1
    assert "selection is empty" in capsys.readouterr().err


def test_missing_document_reports_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main_entry(["project", str(tmp_path / "missing.json")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_invalid_document_reports_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(tmp_path / "bad.json", {"content": []})

    assert main_entry(["map", str(document), "0"]) == 1
    assert "Document validation failed" in capsys.readouterr().err


def test_malformed_registry_yaml_reports_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(tmp_path / "scene.json", SCENE)
    registry = tmp_path / "registry.yaml"
    registry.write_text("characters: [unclosed\n", encoding="utf-8")

    assert main_entry(["context", str(document), "--registry", str(registry), "--from", "5"]) == 1
    assert "Invalid YAML" in capsys.readouterr().err


def test_malformed_config_yaml_reports_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = _write_json(tmp_path / "scene.json", SCENE)
    config = tmp_path / "context.yaml"
    config.write_text("context: {max_characters: 3\n", encoding="utf-8")

    assert main_entry(["context", str(document), "--config", str(config), "--from", "5"]) == 1
    assert "Invalid YAML" in capsys.readouterr().err


@pytest.mark.parametrize("characters", [5, "AVA"])
def test_registry_characters_must_be_a_list(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], characters: object
) -> None:
    document = _write_json(tmp_path / "scene.json", SCENE)
    registry = tmp_path / "registry.yaml"
    registry.write_text(yaml.safe_dump({"characters": characters}), encoding="utf-8")

    assert main_entry(["prompt", str(document), "--registry", str(registry), "--from", "1", "--to", "10"]) == 1
    assert "Registry 'characters' must be a list" in capsys.readouterr().err
