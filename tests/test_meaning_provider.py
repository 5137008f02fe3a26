import json

import httpx
import pytest
from tools import meaning_provider as mp

PROXY = "http://proxy.test/api/gemini-proxy"


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_provider(handler):
    return mp.ProxyMeaningProvider(
        url=PROXY, client=httpx.Client(transport=httpx.MockTransport(handler))
    )


def test_proxy_provider_returns_generated_text():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=gemini_body("猫という意味です。"))

    provider = make_provider(handler)
    assert provider.generate_meaning("cat", detailed=True) == "猫という意味です。"
    assert str(requests[0].url) == PROXY
    assert json.loads(requests[0].content) == {"word": "cat", "detailed": True}


def test_proxy_provider_raises_on_error_status():
    def handler(request):
        return httpx.Response(
            429, json={"error": "API Error: 429", "details": "quota exceeded"}
        )

    with pytest.raises(mp.UpstreamError) as excinfo:
        make_provider(handler).generate_meaning("cat")
    assert str(excinfo.value) == "API Error: 429"
    assert excinfo.value.status == 429
    assert excinfo.value.details == "quota exceeded"


def test_proxy_provider_error_without_json_body():
    def handler(request):
        return httpx.Response(502, text="Bad Gateway")

    with pytest.raises(mp.UpstreamError) as excinfo:
        make_provider(handler).generate_meaning("cat")
    assert str(excinfo.value) == "API Error: 502"
    assert excinfo.value.details == "Bad Gateway"


def test_proxy_provider_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(mp.UpstreamError) as excinfo:
        make_provider(handler).generate_meaning("cat")
    assert "connection refused" in str(excinfo.value)
    assert excinfo.value.status is None


def test_proxy_provider_rejects_response_without_text():
    def handler(request):
        return httpx.Response(200, json={"candidates": []})

    with pytest.raises(mp.UpstreamError):
        make_provider(handler).generate_meaning("cat")


def test_mock_provider_is_offline():
    provider = mp.MockMeaningProvider()
    assert (
        provider.generate_meaning("challenge")
        == "challengeは、「テスト」や「挑戦」を意味する名詞・動詞です。"
    )


def test_get_meaning_provider():
    assert isinstance(mp.get_meaning_provider(), mp.MockMeaningProvider)
    assert isinstance(mp.get_meaning_provider("proxy"), mp.ProxyMeaningProvider)
    with pytest.raises(ValueError):
        mp.get_meaning_provider("carrier-pigeon")
