import asyncio
from types import SimpleNamespace

import pytest

from api_tracer.models import TraceConfig
from api_tracer.session import TraceSession

from fakes import FakePage, FakePlaywright, FakeRequest

PAGE_URL = "https://www.notion.so/Test-text-4c6a54c68b3e4ea2af9cfaabcc88d58d"


@pytest.fixture
def config(tmp_path):
    return TraceConfig(output_path=str(tmp_path / "notion_api_trace.txt"), wait_time=0)


def install(monkeypatch, page):
    playwright = FakePlaywright(page)
    monkeypatch.setattr("api_tracer.session.async_playwright", playwright)
    return playwright


def test_run_writes_one_group_and_one_line(monkeypatch, config, tmp_path):
    monkeypatch.delenv("NOTION_TOKEN", raising=False)
    page = FakePage([
        (FakeRequest("https://www.notion.so/api/v3/loadPageChunk", "POST", '{"limit":50}'), 200, '{"cursor":{}}'),
        (FakeRequest("https://www.notion.so/images/logo.png"), 200, "PNG"),
        (FakeRequest("https://api.amplitude.com/2/httpapi", "POST", "{}"), 200, ""),
    ])
    playwright = install(monkeypatch, page)

    session = TraceSession(config)
    asyncio.run(session.run(PAGE_URL))

    text = (tmp_path / "notion_api_trace.txt").read_text()
    assert text == "\n".join([
        "POST 200 https://www.notion.so/api/v3/loadPageChunk",
        '{\n  "limit": 50\n}',
        '{\n  "cursor": {}\n}',
        "-------------------------------",
        "GET  200 https://www.notion.so/images/logo.png",
    ])
    assert "amplitude" not in text
    assert session.recorder.aborted == 1
    assert playwright.browser.closed
    assert page.goto_calls == [(PAGE_URL, {"wait_until": "networkidle", "timeout": 30000})]


def test_run_without_token_is_public_only(monkeypatch, config, capsys):
    monkeypatch.delenv("NOTION_TOKEN", raising=False)
    playwright = install(monkeypatch, FakePage())

    asyncio.run(TraceSession(config).run(PAGE_URL))

    assert playwright.browser.context.cookies == []
    assert "only public pages" in capsys.readouterr().out


def test_run_with_token_attaches_cookie(monkeypatch, config):
    monkeypatch.setenv("NOTION_TOKEN", "tok")
    playwright = install(monkeypatch, FakePage())

    asyncio.run(TraceSession(config).run(PAGE_URL))

    assert playwright.browser.context.cookies[0]["value"] == "tok"


def test_headless_setting_is_passed_to_launch(monkeypatch, config):
    config.headless = False
    playwright = install(monkeypatch, FakePage())

    asyncio.run(TraceSession(config).run(PAGE_URL))

    assert playwright.chromium.launch_kwargs == {"headless": False}


def test_navigation_error_propagates_without_writing(monkeypatch, config, tmp_path):
    page = FakePage()
    page.goto_error = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
    playwright = install(monkeypatch, page)

    with pytest.raises(RuntimeError):
        asyncio.run(TraceSession(config).run(PAGE_URL))

    assert playwright.browser.closed
    assert not (tmp_path / "notion_api_trace.txt").exists()


def test_settle_delay_uses_wait_time(monkeypatch, config):
    install(monkeypatch, FakePage())
    config.wait_time = 2500
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr("api_tracer.session.asyncio", SimpleNamespace(sleep=fake_sleep))
    asyncio.run(TraceSession(config).run(PAGE_URL))

    assert delays == [2.5]
