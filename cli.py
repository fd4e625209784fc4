import argparse
import json
import sys
from pathlib import Path

from branching import BranchingGraph
from core.logging_setup import setup_console_logging
from serialization import parse_form
from validation import validate_form

setup_console_logging()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check an authored form document")
    parser.add_argument("file", type=Path, help="Path to a form JSON file")
    parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Form title to check instead of the file's formName",
    )
    parser.add_argument(
        "--branches",
        action="store_true",
        help="Print the branch map and unreachable questions",
    )
    return parser.parse_args(argv)


def describe_branches(graph: BranchingGraph) -> list[str]:
    lines = []
    for (question_id, choice_index), target in sorted(graph.edges().items()):
        lines.append(f"{question_id} choice {choice_index + 1} -> {target}")
    for (question_id, choice_index), target in sorted(graph.dangling_edges().items()):
        lines.append(f"{question_id} choice {choice_index + 1} -> {target} (missing)")
    reachable = graph.reachable_ids()
    for question in graph.questions:
        if question.id not in reachable:
            lines.append(f"{question.id} is never reached")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    payload = json.loads(args.file.read_text(encoding="utf-8"))
    document = parse_form(payload)
    title = args.title if args.title is not None else payload.get("formName", "")

    problems = validate_form(document, title)
    for problem in problems:
        print(f"error: {problem}")

    if args.branches:
        for line in describe_branches(BranchingGraph(document.questions())):
            print(line)

    if problems:
        return 1
    print(f"{args.file} is ready: {len(document)} questions")
    return 0


if __name__ == "__main__":
    sys.exit(main())
