import json
from collections.abc import Callable

import httpx
import pytest

from medreport.model.exceptions import (
    ModelBadResponseError,
    ModelError,
    ModelTimeoutError,
    ModelUnreachableError,
)
from medreport.model.ollama_client_adapter import OllamaClientAdapter


def _make_adapter(handler: Callable[[httpx.Request], httpx.Response]) -> OllamaClientAdapter:
    return OllamaClientAdapter(
        host="http://ollama.test:11434/",
        model="llama3.1:8b",
        timeout_seconds=120,
        probe_timeout_seconds=5,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestGenerate:
    def test_returns_response_text_unmodified(self) -> None:
        adapter = _make_adapter(
            lambda request: httpx.Response(200, json={"response": "  not json at all "})
        )
        assert adapter.generate("prompt") == "  not json at all "

    def test_sends_prompt_model_and_options(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"response": "{}"})

        _make_adapter(handler).generate("analyze this")

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://ollama.test:11434/api/generate"
        body = json.loads(request.content)
        assert body["model"] == "llama3.1:8b"
        assert body["prompt"] == "analyze this"
        assert body["stream"] is False
        assert body["options"] == {"temperature": 0.7, "num_predict": 2000}

    def test_uses_analysis_timeout(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"response": ""})

        _make_adapter(handler).generate("p")
        assert seen[0].extensions["timeout"]["read"] == 120

    def test_missing_response_field_gives_empty_text(self) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(200, json={"done": True}))
        assert adapter.generate("p") == ""

    def test_timeout_raises_model_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ModelTimeoutError, match="120"):
            _make_adapter(handler).generate("p")

    def test_connection_failure_raises_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ModelUnreachableError, match="connection refused"):
            _make_adapter(handler).generate("p")

    def test_invalid_url_raises_unreachable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.InvalidURL("Invalid port")

        with pytest.raises(ModelUnreachableError, match="Invalid Ollama host"):
            _make_adapter(handler).generate("p")

    def test_error_status_raises_bad_response(self) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(404, json={"error": "no model"}))
        with pytest.raises(ModelBadResponseError, match="404"):
            adapter.generate("p")

    def test_non_json_body_raises_bad_response(self) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ModelBadResponseError, match="non-JSON"):
            adapter.generate("p")

    def test_all_failures_are_model_errors(self) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(500))
        with pytest.raises(ModelError):
            adapter.generate("p")


class TestProbe:
    def test_reports_reachable_with_tags(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"models": [{"name": "llama3.1:8b"}]})

        probe = _make_adapter(handler).probe()

        assert probe.reachable is True
        assert probe.provider == "ollama"
        assert probe.model == "llama3.1:8b"
        assert probe.details == {"tags": {"models": [{"name": "llama3.1:8b"}]}}
        assert str(seen[0].url) == "http://ollama.test:11434/api/tags"
        assert seen[0].extensions["timeout"]["read"] == 5

    def test_reports_unreachable_without_raising(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        probe = _make_adapter(handler).probe()

        assert probe.reachable is False
        assert "connection refused" in probe.error

    def test_invalid_host_reports_unreachable_without_raising(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.InvalidURL("Invalid port: 'abc'")

        status = _make_adapter(handler).probe()

        assert status.reachable is False
        assert "Invalid port" in status.error


class TestClose:
    def test_close_releases_http_client(self) -> None:
        http_client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        adapter = OllamaClientAdapter(
            host="http://ollama.test:11434",
            model="llama3.1:8b",
            timeout_seconds=120,
            probe_timeout_seconds=5,
            http_client=http_client,
        )

        adapter.close()

        assert http_client.is_closed is True
