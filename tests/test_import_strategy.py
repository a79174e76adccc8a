from __future__ import annotations

from typing import List

from eclipse_spaces.services import prompt_import_strategy


class _Confirm:
    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.messages: List[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answers.pop(0)


def test_merge_when_first_prompt_confirmed() -> None:
    confirm = _Confirm(True)
    assert prompt_import_strategy("zh", confirm) == "merge"
    assert len(confirm.messages) == 1
    assert "合并导入" in confirm.messages[0]


def test_overwrite_when_merge_declined() -> None:
    confirm = _Confirm(False, True)
    assert prompt_import_strategy("en", confirm) == "overwrite"
    assert len(confirm.messages) == 2
    assert "overwrite" in confirm.messages[1]


def test_none_when_both_declined() -> None:
    confirm = _Confirm(False, False)
    assert prompt_import_strategy("zh", confirm) is None
    assert len(confirm.messages) == 2
