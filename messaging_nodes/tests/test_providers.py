import json

import pytest

from messaging_nodes.app.tool.tools.octobot import build_octobot
from messaging_nodes.app.tool.tools.telegram import build_telegram
from messaging_nodes.app.tool.tools.webhook import build_discord, build_slack
from messaging_nodes.app.tool.tools.whatsapp import (
    build_waconnect_file,
    build_waconnect_image,
    build_waconnect_text,
    build_whatsapp_bot,
)
from messaging_nodes.config.settings import settings

GATEWAY = {"apiToken": "secret", "instance_id": "inst"}


async def call(tool, raw: str) -> dict:
    return json.loads(await tool.invoke(raw))


@pytest.mark.asyncio
async def test_waconnect_text_sends_json(stub_provider, monkeypatch):
    monkeypatch.setattr(settings, "waconnect_api_url", stub_provider.url)
    stub_provider.body = {"success": True, "data": {"id": "abc"}}

    out = await call(
        build_waconnect_text(GATEWAY), '{"chat_id":"0101234567","text":"hello"}'
    )

    assert out["success"] is True
    assert "20101234567" in out["message"]
    [sent] = stub_provider.requests
    assert sent["path"] == "/inst/send-message"
    assert sent["json"] == {"token": "secret", "chat_id": "20101234567", "text": "hello"}


@pytest.mark.asyncio
async def test_whatsapp_bot_natural_language(stub_provider, monkeypatch):
    monkeypatch.setattr(settings, "wapilot_api_url", stub_provider.url)
    stub_provider.body = {"ok": True}

    out = await call(
        build_whatsapp_bot(GATEWAY),
        "here is the chat Number : 01110076346 and the message will be Hello from the bot",
    )

    assert out == {
        "success": True,
        "message": "Message sent successfully to this number '201110076346'!",
        "recipient": "201110076346",
    }
    assert stub_provider.requests[0]["json"]["text"] == "Hello from the bot"


@pytest.mark.asyncio
async def test_telegram_send_message(stub_provider, monkeypatch):
    monkeypatch.setattr(settings, "telegram_api_url", stub_provider.url)
    stub_provider.body = {"ok": True, "result": {"message_id": 7}}

    out = await call(
        build_telegram({"botToken": "123:abc"}), '{"chat_id": "-1001234567890", "text": "ping"}'
    )

    assert out == {"success": True, "message": "Message sent successfully to Telegram!"}
    [sent] = stub_provider.requests
    assert sent["path"] == "/bot123:abc/sendMessage"
    assert sent["json"] == {"chat_id": "-1001234567890", "text": "ping"}


@pytest.mark.asyncio
async def test_telegram_rejection_carries_description(stub_provider, monkeypatch):
    monkeypatch.setattr(settings, "telegram_api_url", stub_provider.url)
    stub_provider.status = 400
    stub_provider.body = {"ok": False, "description": "Bad Request: chat not found"}

    out = await call(build_telegram({"botToken": "t"}), '{"chat_id": "42", "text": "hi"}')

    assert out == {"success": False, "error": "Bad Request: chat not found", "status": 400}


@pytest.mark.asyncio
async def test_slack_webhook(stub_provider):
    stub_provider.body = "ok"
    tool = build_slack({"webhookURL": f"{stub_provider.url}/services/T1/B1/X"})

    out = await call(tool, "Deployment finished")

    assert out == {"success": True, "message": "Message sent successfully to Slack!"}
    [sent] = stub_provider.requests
    assert sent["path"] == "/services/T1/B1/X"
    assert sent["json"] == {"text": "Deployment finished"}


@pytest.mark.asyncio
async def test_slack_webhook_failure(stub_provider):
    stub_provider.status = 404
    stub_provider.body = "no_service"
    tool = build_slack({"webhookURL": f"{stub_provider.url}/services/gone"})

    out = await call(tool, "hello")

    assert out == {"success": False, "error": "no_service", "status": 404}


@pytest.mark.asyncio
async def test_discord_webhook_no_content(stub_provider):
    stub_provider.status = 204
    stub_provider.body = None
    tool = build_discord({"webhookURL": f"{stub_provider.url}/api/webhooks/1/abc"})

    out = await call(tool, '{"content": "build is green"}')

    assert out == {"success": True, "message": "Message sent successfully to Discord!"}
    assert stub_provider.requests[0]["json"] == {"content": "build is green"}


@pytest.mark.asyncio
async def test_discord_content_too_long(stub_provider):
    tool = build_discord({"webhookURL": f"{stub_provider.url}/api/webhooks/1/abc"})

    out = await call(tool, "x" * 2001)

    assert out["success"] is False
    assert "2000" in out["error"]
    assert stub_provider.requests == []


@pytest.mark.asyncio
async def test_waconnect_image_multipart(stub_provider, monkeypatch, small_png):
    monkeypatch.setattr(settings, "waconnect_api_url", stub_provider.url)
    stub_provider.body = {"ok": True}

    out = await call(
        build_waconnect_image(GATEWAY),
        json.dumps({"image_path": small_png, "chat_id": "201110076346", "caption": "cat"}),
    )

    assert out["success"] is True
    assert out["message"].startswith("Image sent successfully")
    [sent] = stub_provider.requests
    assert sent["path"] == "/inst/send-image"
    assert sent["form"] == {"token": "secret", "chat_id": "201110076346", "caption": "cat"}
    media = sent["files"]["media"]
    assert media["filename"] == "photo.png"
    assert media["content_type"] == "image/png"
    assert len(media["content"]) == 2048


@pytest.mark.asyncio
async def test_waconnect_image_too_large_sends_nothing(
    stub_provider, monkeypatch, large_png
):
    monkeypatch.setattr(settings, "waconnect_api_url", stub_provider.url)

    out = await call(
        build_waconnect_image(GATEWAY),
        json.dumps({"image_path": large_png, "chat_id": "201110076346"}),
    )

    assert out["success"] is False
    assert "5MB" in out["error"]
    assert stub_provider.requests == []


@pytest.mark.asyncio
async def test_waconnect_file_from_url(stub_provider, monkeypatch):
    monkeypatch.setattr(settings, "waconnect_api_url", stub_provider.url)
    stub_provider.downloads["/files/report.pdf"] = b"%PDF-1.4 remote"
    stub_provider.body = {"ok": True}

    out = await call(
        build_waconnect_file(GATEWAY),
        json.dumps(
            {"file_path": f"{stub_provider.url}/files/report.pdf", "chat_id": "201110076346"}
        ),
    )

    assert out["success"] is True
    [sent] = stub_provider.requests
    assert sent["path"] == "/inst/send-file"
    assert "caption" not in sent["form"]
    assert sent["files"]["media"]["filename"] == "report.pdf"
    assert sent["files"]["media"]["content"] == b"%PDF-1.4 remote"


def octobot(stub_provider, **values):
    return build_octobot(
        {"apiToken": "oct-token", "deviceUuid": "dev-1", "apiUrl": stub_provider.url, **values}
    )


@pytest.mark.asyncio
async def test_octobot_text_message(stub_provider):
    stub_provider.body = {"success": True}

    out = await call(
        octobot(stub_provider),
        '{"recipients": "201110076346,01110076347", "text_message": "Meeting at 5"}',
    )

    assert out == {"success": True, "message": "text sent", "count": 2}
    [sent] = stub_provider.requests
    assert sent["headers"]["x-api-token"] == "oct-token"
    assert sent["form"] == {
        "device_uuid": "dev-1",
        "type_message": "text",
        "type_contact": "numbers",
        "ids": "201110076346,201110076347",
        "text_message": "Meeting at 5",
    }


@pytest.mark.asyncio
async def test_octobot_scheduled_document(stub_provider, small_pdf):
    stub_provider.body = {"success": True}
    tool = octobot(
        stub_provider,
        type_message="doc",
        media_path=small_pdf,
        time_to_send="2025-05-20 11:33:00",
        timezone="Asia/Riyadh",
    )

    out = await call(tool, '{"recipients": "201110076346"}')

    assert out == {"success": True, "message": "doc sent", "count": 1}
    [sent] = stub_provider.requests
    assert sent["form"]["time_to_send"] == "2025-05-20 11:33:00"
    assert sent["form"]["timezone"] == "Asia/Riyadh"
    assert "text_message" not in sent["form"]
    assert sent["files"]["media"]["filename"] == "report.pdf"


@pytest.mark.asyncio
async def test_octobot_create_group(stub_provider, monkeypatch):
    monkeypatch.setattr(settings, "octobot_group_url", f"{stub_provider.url}/groups/create")
    participants = ["201110076346", "201110076347", "201110076348"]
    stub_provider.body = {
        "success": True,
        "msg": "Group created",
        "data": {
            "groupId": "120363123456789012@g.us",
            "subject": "Team",
            "participants": participants,
            "inviteLink": "https://chat.whatsapp.com/abc",
        },
    }
    tool = octobot(stub_provider, type_message="create_group")

    out = await call(
        tool, json.dumps({"recipients": ",".join(participants), "text_message": "Team"})
    )

    assert out == {
        "success": True,
        "message": "Group created",
        "groupId": "120363123456789012@g.us",
        "subject": "Team",
        "participants": participants,
        "inviteLink": "https://chat.whatsapp.com/abc",
    }
    [sent] = stub_provider.requests
    assert sent["path"] == "/groups/create"
    assert sent["form"] == {
        "deviceUuid": "dev-1",
        "subject": "Team",
        "participants": ",".join(participants),
    }


@pytest.mark.asyncio
async def test_octobot_failure_text_is_truncated(stub_provider):
    stub_provider.body = {"success": False, "msg": "device offline " * 30}

    out = await call(
        octobot(stub_provider), '{"recipients": "201110076346", "text_message": "hi"}'
    )

    assert out["success"] is False
    assert len(out["error"]) == 100
    assert out["error"].startswith("device offline")
    assert out["status"] == 200


@pytest.mark.asyncio
async def test_unreachable_provider(monkeypatch):
    monkeypatch.setattr(settings, "wapilot_api_url", "http://127.0.0.1:1")

    out = await call(
        build_whatsapp_bot(GATEWAY), '{"chat_id": "201110076346", "text": "hi"}'
    )

    assert out["success"] is False
    assert out["error"].startswith("WhatsApp request failed")
    assert len(out["error"]) <= 100


@pytest.mark.asyncio
async def test_undecodable_error_body(stub_provider, monkeypatch):
    monkeypatch.setattr(settings, "telegram_api_url", stub_provider.url)
    stub_provider.status = 502
    stub_provider.body = b"\xff\xfe bad gateway \x80" + b"!" * 300

    out = await call(build_telegram({"botToken": "t"}), '{"chat_id": "42", "text": "hi"}')

    assert out["success"] is False
    assert out["status"] == 502
    assert "bad gateway" in out["error"]
    assert len(out["error"]) == 100
