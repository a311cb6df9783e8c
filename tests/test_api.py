from __future__ import annotations

from fastapi.testclient import TestClient

from growth_agent.agents.schemas import HookOutput, SpotlightOutput
from growth_agent.config.settings import Settings
from growth_agent.main import create_app
from growth_agent.storage.memory import InMemoryReportStore

from .conftest import TRANSCRIPT, ScriptedGenerator, hook_payload


def _create(client: TestClient, transcript: str = TRANSCRIPT, **extra: object) -> dict:
    response = client.post("/reports", json={"transcript": transcript, **extra})
    assert response.status_code == 200, response.text
    return response.json()


def test_health_routes(client: TestClient) -> None:
    for path in ("/health", "/healthz", "/live"):
        response = client.get(path)
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


def test_agents_lists_registry_in_order(client: TestClient) -> None:
    response = client.get("/agents")

    assert response.status_code == 200
    agents = response.json()["agents"]
    assert [agent["name"] for agent in agents] == ["insight", "hook", "spotlight", "amplify", "pulse"]
    assert all(agent["timeout_s"] == 2.0 for agent in agents)
    assert all(agent["model"] == "gpt-5" for agent in agents)


def test_create_report_returns_full_report(client: TestClient) -> None:
    body = _create(client, episode_id="ep-7")

    assert body["report_id"].startswith("rprt_")
    assert body["episode_id"] == "ep-7"
    assert body["source"] == "direct_transcript_upload"
    assert body["input_fingerprint"] == len(TRANSCRIPT.strip())
    assert body["tally"] == {"succeeded": 5, "failed": 0, "total": 5}
    assert body["task_errors"] == []
    assert set(body["task_results"]) == {"insight", "hook", "spotlight", "amplify", "pulse"}
    assert len(body["task_results"]["hook"]["title_options"]) == 3


def test_create_report_with_failing_agent_still_succeeds(
    settings: Settings, store: InMemoryReportStore
) -> None:
    generator = ScriptedGenerator({SpotlightOutput: RuntimeError("upstream 502")})
    app = create_app(settings_override=settings, storage=store, generator=generator)

    with TestClient(app) as client:
        body = _create(client)

    assert body["task_results"]["spotlight"] is None
    assert body["tally"] == {"succeeded": 4, "failed": 1, "total": 5}
    assert body["task_errors"][0]["task_name"] == "spotlight"
    assert body["task_errors"][0]["reason"] == "upstream 502"


def test_create_report_rejects_blank_transcript(client: TestClient) -> None:
    response = client.post("/reports", json={"transcript": "    "})

    assert response.status_code == 400
    assert response.json()["detail"] == "transcript is required"


def test_create_report_rejects_missing_transcript(client: TestClient) -> None:
    assert client.post("/reports", json={}).status_code == 422


def test_create_report_rejects_too_long_transcript(
    settings: Settings, store: InMemoryReportStore, generator: ScriptedGenerator
) -> None:
    limited = settings.model_copy(update={"max_transcript_chars": 200})
    app = create_app(settings_override=limited, storage=store, generator=generator)

    with TestClient(app) as client:
        response = client.post("/reports", json={"transcript": TRANSCRIPT})

    assert response.status_code == 400
    assert "Transcript too long" in response.json()["detail"]
    assert generator.calls == []


def test_create_report_rejects_mostly_symbols(
    client: TestClient, generator: ScriptedGenerator
) -> None:
    response = client.post("/reports", json={"transcript": "!?#$ %^&* ()[]{} ~~ ab"})

    assert response.status_code == 400
    assert "non-alphanumeric" in response.json()["detail"]
    assert generator.calls == []


def test_get_report_round_trip(client: TestClient) -> None:
    created = _create(client)

    response = client.get(f"/reports/{created['report_id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_report_returns_404(client: TestClient) -> None:
    response = client.get("/reports/rprt_0_missing")

    assert response.status_code == 404
    assert response.json()["detail"] == "Report not found"


def test_rerun_success_updates_stored_report(
    client: TestClient, generator: ScriptedGenerator
) -> None:
    created = _create(client)
    generator.script[HookOutput] = hook_payload(prefix="Again")

    response = client.post(f"/reports/{created['report_id']}/rerun", json={"agent_name": "hook"})

    assert response.status_code == 200
    body = response.json()
    assert body["agent_name"] == "hook"
    assert body["succeeded"] is True
    assert body["failure_reason"] is None
    assert body["resource_usage"] == {"input_tokens": 120, "output_tokens": 40}
    report = body["report"]
    assert report["task_results"]["hook"]["title_options"][0]["title"] == "Again Authority"
    assert report["task_results"]["insight"] == created["task_results"]["insight"]
    assert len(report["reruns"]) == 1
    assert client.get(f"/reports/{created['report_id']}").json() == report


def test_rerun_failure_is_reported_without_dropping_previous_payload(
    client: TestClient, generator: ScriptedGenerator
) -> None:
    created = _create(client)
    generator.script[HookOutput] = RuntimeError("rate limited")

    response = client.post(f"/reports/{created['report_id']}/rerun", json={"agent_name": "hook"})

    assert response.status_code == 200
    body = response.json()
    assert body["succeeded"] is False
    assert body["failure_reason"] == "rate limited"
    assert body["report"]["task_results"]["hook"] == created["task_results"]["hook"]
    assert body["report"]["tally"] == created["tally"]


def test_rerun_unknown_agent_returns_400(client: TestClient) -> None:
    created = _create(client)

    response = client.post(
        f"/reports/{created['report_id']}/rerun", json={"agent_name": "nonexistent"}
    )

    assert response.status_code == 400
    assert "nonexistent" in response.json()["detail"]
    assert client.get(f"/reports/{created['report_id']}").json() == created


def test_rerun_missing_report_returns_404(client: TestClient) -> None:
    response = client.post("/reports/rprt_0_missing/rerun", json={"agent_name": "hook"})

    assert response.status_code == 404


def test_rerun_legacy_report_returns_409(client: TestClient, store: InMemoryReportStore) -> None:
    created = _create(client)
    legacy = store.load(created["report_id"])
    legacy.input_echo = None
    store.save(legacy)

    response = client.post(f"/reports/{created['report_id']}/rerun", json={"agent_name": "hook"})

    assert response.status_code == 409


def test_rerun_response_carries_fractional_usage(
    client: TestClient, generator: ScriptedGenerator
) -> None:
    created = _create(client)
    generator.usages[HookOutput] = {"output_tokens": 12, "cost_usd": 0.0125}

    response = client.post(f"/reports/{created['report_id']}/rerun", json={"agent_name": "hook"})

    assert response.status_code == 200
    assert response.json()["resource_usage"] == {"output_tokens": 12, "cost_usd": 0.0125}
