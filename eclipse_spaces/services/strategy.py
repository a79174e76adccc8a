from __future__ import annotations

from typing import Callable, Literal, Optional

from eclipse_spaces.i18n import tr

ImportStrategy = Literal["merge", "overwrite"]


def prompt_import_strategy(lang: str, confirm_fn: Callable[[str], bool]) -> Optional[ImportStrategy]:
    """Ask merge first, then overwrite; ``None`` when both are declined."""
    if confirm_fn(tr("strategy.merge", lang)):
        return "merge"
    if confirm_fn(tr("strategy.overwrite", lang)):
        return "overwrite"
    return None
