"""Choice-specific jumps between questions."""
from __future__ import annotations

from collections import deque
from typing import Iterable

from errors import InvalidBranchError, UnknownItemError
from models import Choice, MCQQuestion, Question


class BranchingGraph:
    """
    Directed graph over an ordered question sequence.

    An edge (question id, choice index) -> target id comes from
    `Choice.target_id`. A question without an edge for the chosen
    answer falls through to the next question in the sequence. Targets
    that are no longer in the sequence are treated as absent.
    """

    def __init__(self, questions: Iterable[Question]) -> None:
        self.questions = list(questions)
        self._positions = {
            question.id: index for index, question in enumerate(self.questions)
        }

    def index_of(self, question_id: str | None) -> int | None:
        if question_id is None:
            return None
        return self._positions.get(question_id)

    def edges(self) -> dict[tuple[str, int], str]:
        result: dict[tuple[str, int], str] = {}
        for question in self.questions:
            if not isinstance(question, MCQQuestion):
                continue
            for choice_index in range(len(question.choices)):
                target = self.target_for(question.id, choice_index)
                if target is not None:
                    result[(question.id, choice_index)] = target
        return result

    def dangling_edges(self) -> dict[tuple[str, int], str]:
        result: dict[tuple[str, int], str] = {}
        for question in self.questions:
            if not isinstance(question, MCQQuestion):
                continue
            for choice_index, choice in enumerate(question.choices):
                if choice.target_id is not None and choice.target_id not in self._positions:
                    result[(question.id, choice_index)] = choice.target_id
        return result

    def target_for(self, question_id: str, choice_index: object) -> str | None:
        question = self._mcq(question_id)
        if question is None:
            return None
        if not isinstance(choice_index, int) or isinstance(choice_index, bool):
            return None
        if not 0 <= choice_index < len(question.choices):
            return None
        target = question.choices[choice_index].target_id
        if target is None or target == question_id or target not in self._positions:
            return None
        return target

    def set_edge(self, question_id: str, choice_index: int, target_id: str) -> None:
        question = self._require_choice(question_id, choice_index)
        if target_id not in self._positions:
            raise InvalidBranchError(f"Branch target not found: {target_id}")
        if target_id == question_id:
            raise InvalidBranchError("A choice cannot branch to its own question")
        text = question.choices[choice_index].text
        question.choices[choice_index] = Choice(text, target_id)

    def clear_edge(self, question_id: str, choice_index: int) -> None:
        question = self._require_choice(question_id, choice_index)
        text = question.choices[choice_index].text
        question.choices[choice_index] = Choice(text, None)

    def successors(self, question_id: str) -> list[str]:
        """
        Questions that can follow `question_id`.

        The default next question comes first, unless every choice of an
        mcq question branches elsewhere; branch targets follow in choice
        order.
        """
        index = self._positions.get(question_id)
        if index is None:
            return []
        question = self.questions[index]
        targets: list[str | None] = [None]
        if isinstance(question, MCQQuestion) and question.choices:
            targets = [
                self.target_for(question_id, choice_index)
                for choice_index in range(len(question.choices))
            ]
        result: list[str] = []
        if None in targets and index + 1 < len(self.questions):
            result.append(self.questions[index + 1].id)
        for target in targets:
            if target is not None and target not in result:
                result.append(target)
        return result

    def reachable_ids(self) -> set[str]:
        if not self.questions:
            return set()
        start = self.questions[0].id
        seen = {start}
        queue = deque([start])
        while queue:
            for successor in self.successors(queue.popleft()):
                if successor not in seen:
                    seen.add(successor)
                    queue.append(successor)
        return seen

    def _mcq(self, question_id: str) -> MCQQuestion | None:
        index = self._positions.get(question_id)
        if index is None:
            return None
        question = self.questions[index]
        return question if isinstance(question, MCQQuestion) else None

    def _require_choice(self, question_id: str, choice_index: int) -> MCQQuestion:
        if question_id not in self._positions:
            raise UnknownItemError(f"Question not found: {question_id}")
        question = self._mcq(question_id)
        if question is None:
            raise InvalidBranchError("Only multiple choice questions can branch")
        if not 0 <= choice_index < len(question.choices):
            raise InvalidBranchError(f"Choice {choice_index} does not exist")
        return question
