from __future__ import annotations

import json

from queuegraph.cli import main

PROJECT = {
    "src/emitter.ts": """
        export class Emitter {
            constructor(private readonly rmq: RMQService) {}
            emit() { this.rmq.send('orders.created', {}); }
        }
    """,
    "src/consumer.ts": """
        export class Consumer {
            @RMQRoute('orders.created')
            consume() {}
        }
    """,
}


def test_analyze_prints_json(nest_project, capsys) -> None:
    root = nest_project(PROJECT)
    assert main(["analyze", str(root)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["links"] == [
        {"source": "sender:Emitter.emit", "target": "listener:Consumer.consume", "label": "orders.created"}
    ]


def test_analyze_writes_dot_file(nest_project, tmp_path, capsys) -> None:
    root = nest_project(PROJECT)
    output = tmp_path / "graph.dot"
    assert main(["analyze", str(root), "--format", "dot", "--output", str(output), "--workers", "2"]) == 0
    assert '"sender:Emitter.emit" -> "listener:Consumer.consume"' in output.read_text(encoding="utf-8")
    assert "wrote dot" in capsys.readouterr().err


def test_missing_input(capsys) -> None:
    assert main(["analyze"]) == 2
    assert "Input is empty!" in capsys.readouterr().err


def test_relative_path(capsys) -> None:
    assert main(["analyze", "some/project"]) == 2
    assert "Project path format is invalid" in capsys.readouterr().err


def test_inaccessible_path(tmp_path, capsys) -> None:
    assert main(["analyze", str(tmp_path / "nope")]) == 1
    assert "cannot be accessed" in capsys.readouterr().err


def test_empty_project_reports_no_data(nest_project, capsys) -> None:
    root = nest_project({"src/plain.ts": "export class Plain { run() {} }\n"})
    assert main(["analyze", str(root), "--format", "summary"]) == 0
    captured = capsys.readouterr()
    assert "No data found" in captured.err
    assert "Links     : 0" in captured.out


def test_bad_settings_file(nest_project, tmp_path, capsys) -> None:
    root = nest_project(PROJECT)
    settings = tmp_path / "bad.yml"
    settings.write_text("unexpected: true\n", encoding="utf-8")
    assert main(["analyze", str(root), "--config", str(settings)]) == 2
    assert "Unknown configuration keys" in capsys.readouterr().err

    assert main(["analyze", str(root), "--config", str(tmp_path / "absent.yml")]) == 1
    assert "could not be found" in capsys.readouterr().err


def test_non_integer_workers_in_project_settings(nest_project, capsys) -> None:
    root = nest_project({**PROJECT, ".queuegraph.yml": "workers: 'four'\n"})
    assert main(["analyze", str(root)]) == 2
    assert "workers must be an integer" in capsys.readouterr().err
