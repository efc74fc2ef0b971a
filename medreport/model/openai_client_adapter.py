import httpx
import openai

from medreport.model.base import BaseModelClient
from medreport.model.exceptions import (
    ModelBadResponseError,
    ModelTimeoutError,
    ModelUnreachableError,
)
from medreport.model.models import ModelProbe


class OpenAIClientAdapter(BaseModelClient):
    """Model client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: float,
        probe_timeout_seconds: float,
        base_url: str | None = None,
        temperature: float = 0.7,
        provider: str = "openai",
    ) -> None:
        self.provider = provider
        self._model = model
        self._temperature = temperature
        self._probe_timeout = probe_timeout_seconds
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    @property
    def model(self) -> str:
        return self._model

    def generate(self, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=self._temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise ModelTimeoutError(f"AI provider timed out: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise ModelUnreachableError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ModelBadResponseError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ModelBadResponseError("AI returned no choices")
        return response.choices[0].message.content or ""

    def probe(self) -> ModelProbe:
        try:
            models = self._client.with_options(timeout=self._probe_timeout).models.list()
            names = [m.id for m in models.data]
        except (openai.APIError, httpx.HTTPError) as exc:
            return ModelProbe(
                reachable=False, provider=self.provider, model=self._model, error=str(exc)
            )
        return ModelProbe(
            reachable=True,
            provider=self.provider,
            model=self._model,
            details={"models": names},
        )

    def close(self) -> None:
        self._client.close()
