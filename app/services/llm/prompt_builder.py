from __future__ import annotations

from typing import Dict, List

from config.constants import SYSTEM_PROMPT
from models.claims import Category


class PromptBuilder:
    """Builds chat messages for denial note classification."""

    def __init__(self, system_prompt: str = SYSTEM_PROMPT):
        self.system_prompt = system_prompt

    # -------------------- Denial Classification Prompt -------------------- #

    def build_user_prompt(self, denial_note: str) -> str:
        """Embed the denial note verbatim and describe the expected JSON reply."""
        allowed = ", ".join(Category.values())
        return (
            "Classify the following medical claim denial note.\n\n"
            "Denial Note:\n"
            f'"{denial_note}"\n\n'
            "Return a JSON object with this structure:\n"
            "{\n"
            f'  "categories": [ "one or more from: {allowed}" ],\n'
            '  "extracted_fields": {\n'
            '    "payer": "string or null",\n'
            '    "cpt_codes": ["list of codes if any, else []"],\n'
            '    "suggested_action": "short plain English suggestion"\n'
            "  }\n"
            "}\n"
        )

    def build_messages(self, denial_note: str) -> List[Dict[str, str]]:
        """Return the system message followed by the user message."""
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.build_user_prompt(denial_note)},
        ]


__all__ = ["PromptBuilder"]
