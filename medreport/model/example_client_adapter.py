"""Example model client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseModelClient and register the provider in ModelClientFactory.
"""

import json
from typing import ClassVar

from medreport.model.base import BaseModelClient
from medreport.model.models import ModelProbe


class ExampleClientAdapter(BaseModelClient):
    """Example adapter that returns a fixed, well-formed analysis.

    No network calls. Useful for local development and tests.
    """

    provider = "example"

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "The uploaded reports were received and processed by the example model.",
        "key_findings": ["No real analysis was performed (example provider)."],
        "possible_red_flags": [],
        "recommended_followups": [],
        "questions_for_doctor": [],
        "disclaimer": (
            "This is an AI-generated analysis for educational purposes only. "
            "Always consult with your healthcare provider."
        ),
    }

    def __init__(self, response: str | None = None) -> None:
        self._response = response if response is not None else json.dumps(self.DEFAULT_RESPONSE)

    @property
    def model(self) -> str:
        return "example"

    def generate(self, prompt: str) -> str:
        _ = prompt
        return self._response

    def probe(self) -> ModelProbe:
        return ModelProbe(reachable=True, provider=self.provider, model=self.model)
