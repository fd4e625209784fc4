import json
from pathlib import Path

import cli


def test_cli_reports_problems(tmp_path: Path, capsys) -> None:
    path = tmp_path / "form.json"
    path.write_text(
        json.dumps(
            {
                "formName": "",
                "questions": [
                    {
                        "clientId": "A",
                        "questionType": "mcq",
                        "choices": [{"text": "yes", "nextQuestionId": "C"}],
                    },
                    {"clientId": "B", "questionType": "text"},
                ],
            }
        ),
        encoding="utf-8",
    )
    assert cli.main([str(path), "--branches"]) == 1
    output = capsys.readouterr().out
    assert "error: Form title is required" in output
    assert "A choice 1 -> C (missing)" in output


def test_cli_accepts_ready_form(tmp_path: Path, capsys) -> None:
    path = tmp_path / "form.json"
    path.write_text(
        json.dumps(
            {
                "formName": "Ready",
                "questions": [
                    {
                        "clientId": "A",
                        "questionType": "mcq",
                        "choices": [{"text": "skip", "nextQuestionId": "C"}],
                    },
                    {"clientId": "B", "questionType": "text"},
                    {"clientId": "C", "questionType": "text"},
                ],
            }
        ),
        encoding="utf-8",
    )
    assert cli.main([str(path), "--branches"]) == 0
    output = capsys.readouterr().out
    assert "A choice 1 -> C" in output
    assert "B is never reached" in output
    assert "ready: 3 questions" in output
