import httpx

from medreport.model.base import BaseModelClient
from medreport.model.exceptions import (
    ModelBadResponseError,
    ModelTimeoutError,
    ModelUnreachableError,
)
from medreport.model.models import ModelProbe


class OllamaClientAdapter(BaseModelClient):
    """Model client for the native Ollama HTTP API."""

    provider = "ollama"

    def __init__(
        self,
        *,
        host: str,
        model: str,
        timeout_seconds: float,
        probe_timeout_seconds: float,
        temperature: float = 0.7,
        num_predict: int = 2000,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._host = host.rstrip("/")
        self._model = model
        self._timeout = timeout_seconds
        self._probe_timeout = probe_timeout_seconds
        self._options = {"temperature": temperature, "num_predict": num_predict}
        self._http = http_client or httpx.Client()

    @property
    def model(self) -> str:
        return self._model

    def generate(self, prompt: str) -> str:
        try:
            response = self._http.post(
                f"{self._host}/api/generate",
                json={
                    "model": self._model,
                    "prompt": prompt,
                    "stream": False,
                    "options": self._options,
                },
                timeout=self._timeout,
            )
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as exc:
            raise ModelTimeoutError(
                f"Ollama did not respond within {self._timeout}s"
            ) from exc
        except httpx.TransportError as exc:
            raise ModelUnreachableError(f"Ollama network error: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise ModelUnreachableError(f"Invalid Ollama host '{self._host}': {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise ModelBadResponseError(
                f"Ollama returned HTTP {exc.response.status_code}"
            ) from exc
        except ValueError as exc:
            raise ModelBadResponseError(f"Ollama returned a non-JSON body: {exc}") from exc

        if not isinstance(body, dict):
            raise ModelBadResponseError("Ollama response must be an object")
        text = body.get("response")
        return text if isinstance(text, str) else ""

    def probe(self) -> ModelProbe:
        try:
            response = self._http.get(f"{self._host}/api/tags", timeout=self._probe_timeout)
            response.raise_for_status()
            tags = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            return ModelProbe(
                reachable=False, provider=self.provider, model=self._model, error=str(exc)
            )
        return ModelProbe(
            reachable=True,
            provider=self.provider,
            model=self._model,
            details={"tags": tags},
        )

    def close(self) -> None:
        self._http.close()
