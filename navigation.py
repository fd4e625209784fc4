"""Preview-mode stepping over a form, with branching and back navigation."""
from __future__ import annotations

import logging
from typing import Iterable

from branching import BranchingGraph
from models import Answer, MCQQuestion, NavigationState, Question
from validation import is_question_valid

log = logging.getLogger(__name__)


class PreviewSession:
    """
    Runs a snapshot of the form's questions as a respondent would see them.

    Refused moves return False and leave the state untouched. The jump
    to a pending branch target and the clearing of that target happen
    in the same call to `next()`.
    """

    def __init__(self, questions: Iterable[Question]) -> None:
        self.graph = BranchingGraph(questions)
        self.state = NavigationState()

    @property
    def questions(self) -> list[Question]:
        return self.graph.questions

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def history(self) -> list[int]:
        return list(self.state.history)

    @property
    def answers(self) -> dict[str, Answer]:
        return dict(self.state.answers)

    @property
    def current_question(self) -> Question | None:
        if 0 <= self.state.current_index < len(self.questions):
            return self.questions[self.state.current_index]
        return None

    def reset(self) -> None:
        self.state = NavigationState()

    def answer(self, question_id: str, value: Answer) -> bool:
        if self.graph.index_of(question_id) is None:
            log.debug("Answer for unknown question %s ignored", question_id)
            return False
        self.state.answers[question_id] = value
        current = self.current_question
        if current is not None and current.id == question_id:
            self._sync_pending()
        return True

    def is_current_valid(self) -> bool:
        question = self.current_question
        if question is None:
            return False
        return is_question_valid(question, self.state.answers.get(question.id))

    def is_path_valid(self) -> bool:
        """Every question on the visited path still holds a valid answer."""
        return all(
            is_question_valid(question, self.state.answers.get(question.id))
            for question in self.visited_path()
        )

    @property
    def can_advance(self) -> bool:
        return self.is_current_valid() and self._destination() is not None

    @property
    def can_retreat(self) -> bool:
        return bool(self.state.history)

    @property
    def is_last(self) -> bool:
        return bool(self.questions) and self.state.current_index == len(self.questions) - 1

    @property
    def can_submit(self) -> bool:
        return (
            self.is_last
            and self.state.pending_next_id is None
            and self.is_path_valid()
        )

    def next(self) -> bool:
        if not self.is_current_valid():
            return False
        destination = self._destination()
        if destination is None:
            return False

        state = self.state
        if destination in state.history:
            # jumping back to a visited question rewinds the trail to it
            del state.history[state.history.index(destination):]
        else:
            state.history.append(state.current_index)
        log.debug("Preview moved %d -> %d", state.current_index, destination)
        state.current_index = destination
        self._sync_pending()
        return True

    def previous(self) -> bool:
        if not self.state.history:
            return False
        self.state.current_index = self.state.history.pop()
        self._sync_pending()
        return True

    def visited_path(self) -> list[Question]:
        indices = self.state.history + [self.state.current_index]
        return [self.questions[index] for index in indices if index < len(self.questions)]

    def _destination(self) -> int | None:
        current = self.state.current_index
        target = self.graph.index_of(self.state.pending_next_id)
        if target is not None and target != current:
            return target
        if current < len(self.questions) - 1:
            return current + 1
        return None

    def _sync_pending(self) -> None:
        question = self.current_question
        target = None
        if isinstance(question, MCQQuestion):
            target = self.graph.target_for(
                question.id, self.state.answers.get(question.id)
            )
        self.state.pending_next_id = target
