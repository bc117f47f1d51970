"""AI copy assistance endpoint tests."""

import json

import httpx

GENERATED = {
    "tagline": "Clarity for growing firms",
    "heroHeadline": "Advice that moves you forward",
    "heroSubheadline": "Practical strategy. Measurable results.",
    "services": [
        {"title": "Strategy", "description": "Plans you can act on."},
        {"title": "Operations", "description": "Smoother day to day."},
    ],
    "seoDescription": "Consulting for small businesses.",
}


def _chat(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


async def test_ai_generate_success(client, llm):
    llm.handler = lambda request: _chat("```json\n" + json.dumps(GENERATED) + "\n```")
    response = await client.post(
        "/api/ai-generate",
        json={"businessDescription": "We help small firms plan growth", "industry": "consulting"},
    )
    assert response.status_code == 200
    assert response.json() == GENERATED
    sent = json.loads(llm.calls[0].content)
    assert sent["model"] == "test-model"
    assert "Industry: consulting" in sent["messages"][1]["content"]


async def test_ai_generate_short_description_no_upstream_call(client, llm):
    response = await client.post("/api/ai-generate", json={"businessDescription": "too short"})
    assert response.status_code == 400
    assert response.json()["error"] == (
        "Please provide a more detailed business description (at least 10 characters)."
    )
    assert llm.calls == []


async def test_ai_generate_invalid_body(client, llm):
    response = await client.post(
        "/api/ai-generate", content="not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert llm.calls == []


async def test_ai_generate_not_configured(client, llm):
    llm.configured = False
    response = await client.post(
        "/api/ai-generate", json={"businessDescription": "We help small firms plan growth"}
    )
    assert response.status_code == 503
    assert "AI not available" in response.json()["error"]


async def test_ai_generate_unparseable(client, llm):
    llm.handler = lambda request: _chat("Sorry, I can't help with that.")
    response = await client.post(
        "/api/ai-generate", json={"businessDescription": "We help small firms plan growth"}
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to parse AI response. Please try again."}


async def test_ai_generate_upstream_failure(client, llm):
    llm.handler = lambda request: httpx.Response(500, text="overloaded")
    response = await client.post(
        "/api/ai-generate", json={"businessDescription": "We help small firms plan growth"}
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate content. Please try again."}


async def test_ai_polish_success(client, llm):
    llm.handler = lambda request: _chat("  Hand-roasted coffee, brewed with care.  ")
    response = await client.post("/api/ai-polish", json={"text": "we sell good coffee"})
    assert response.status_code == 200
    assert response.json() == {
        "polished": "Hand-roasted coffee, brewed with care.",
        "originalLength": 19,
        "polishedLength": 38,
    }


async def test_ai_polish_rejects_long_text(client, llm):
    response = await client.post("/api/ai-polish", json={"text": "x" * 2001})
    assert response.status_code == 400
    assert response.json()["error"] == "Text too long. Maximum 2000 characters."
    assert llm.calls == []


async def test_ai_polish_upstream_failure_includes_details(client, llm):
    llm.handler = lambda request: httpx.Response(503, json={"error": "model loading"})
    response = await client.post("/api/ai-polish", json={"text": "we sell good coffee"})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to process text with AI"
    assert "model loading" in body["details"]
