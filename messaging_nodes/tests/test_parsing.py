import json

import pytest

from messaging_nodes.app.tool.parsing import normalize_recipient
from messaging_nodes.app.tool.tools.octobot.octobot import octobot_parser
from messaging_nodes.app.tool.tools.telegram.telegram import PARSER as TELEGRAM_PARSER
from messaging_nodes.app.tool.tools.webhook.webhook import _webhook_parser
from messaging_nodes.app.tool.tools.whatsapp.bot import PARSER as BOT_PARSER
from messaging_nodes.app.tool.tools.whatsapp.waconnect import (
    FILE_PARSER,
    IMAGE_PARSER,
    TEXT_PARSER,
)
from messaging_nodes.base.errors import ParseError
from messaging_nodes.enum.message import MessageKind


def test_bot_natural_language():
    req = BOT_PARSER.parse(
        "here is the chat Number : 201110076346 and the message will be Hi there"
    )
    assert req.recipient == "201110076346"
    assert req.text == "Hi there"


def test_json_takes_priority_over_patterns():
    raw = json.dumps(
        {
            "chat_id": "201234567890",
            "text": "the chat Number : 209999999999 and the message will be other",
        }
    )
    req = BOT_PARSER.parse(raw)
    assert req.recipient == "201234567890"
    assert req.text.startswith("the chat Number")


def test_json_missing_field_falls_back_to_patterns():
    raw = '{"chat_id": "", "note": "chat Number : 201110076346 and the message will be yo"}'
    req = BOT_PARSER.parse(raw)
    assert req.recipient == "201110076346"
    assert req.text == 'yo"}'


@pytest.mark.parametrize(
    "raw",
    [
        '{"chat_id": "0101234567", "text": "hello"}',
        "send message to chat Number : 0101234567 with text hello.",
    ],
)
def test_leading_zero_gets_country_digit_on_both_paths(raw):
    req = TEXT_PARSER.parse(raw)
    assert req.recipient == "20101234567"
    assert req.text == "hello"


def test_normalize_bulk_recipients():
    assert normalize_recipient("0101, 201, 0123") == "20101,201,20123"


def test_numeric_json_chat_id_is_stringified():
    req = TELEGRAM_PARSER.parse('{"chatId": 123456789, "message": "ping"}')
    assert req.recipient == "123456789"
    assert req.text == "ping"


def test_with_text_stops_at_first_period():
    req = TEXT_PARSER.parse("chat Number: 201110076346 with text First sentence. Second one.")
    assert req.text == "First sentence"


def test_patterns_are_case_insensitive():
    req = TEXT_PARSER.parse("CHAT NUMBER : 201110076346 TEXT: shouting")
    assert req.recipient == "201110076346"
    assert req.text == "shouting"


def test_file_path_and_caption():
    req = FILE_PARSER.parse(
        "here is the chat Number : 201110076346 and the file path is /tmp/a.pdf "
        "with caption Quarterly report. Thanks"
    )
    assert req.media == "/tmp/a.pdf"
    assert req.caption == "Quarterly report"


def test_image_json_caption_optional():
    req = IMAGE_PARSER.parse('{"image_path": "https://x.io/cat.png", "chat_id": "201110076346"}')
    assert req.media == "https://x.io/cat.png"
    assert req.caption is None


def test_parse_error_describes_both_formats():
    with pytest.raises(ParseError) as exc:
        FILE_PARSER.parse("please send my document")
    message = exc.value.message
    assert '{"file_path"' in message
    assert "natural language" in message


def test_webhook_whole_input_is_message():
    parser = _webhook_parser("text")
    assert parser.parse("  deploy finished  ").text == "deploy finished"
    assert parser.parse('{"text": "from json"}').text == "from json"
    # JSON without the body key is still a plain message
    assert parser.parse('{"content": "x"}').text == '{"content": "x"}'


def test_webhook_empty_input_fails():
    with pytest.raises(ParseError):
        _webhook_parser("content").parse("   ")


def test_octobot_group_fields():
    parser = octobot_parser(MessageKind.CREATE_GROUP)
    req = parser.parse(
        json.dumps(
            {
                "recipients": "201110076346,201110076347,201110076348",
                "text_message": "Team",
                "group_picture_url": "https://x.io/g.png",
            }
        )
    )
    assert req.recipients == ["201110076346", "201110076347", "201110076348"]
    assert req.text == "Team"
    assert req.group_picture == "https://x.io/g.png"


def test_octobot_media_kind_text_optional():
    req = octobot_parser(MessageKind.IMAGE).parse('{"recipients": "01110076346"}')
    assert req.recipient == "201110076346"
    assert req.text is None


def test_octobot_spaced_recipient_list():
    req = octobot_parser(MessageKind.TEXT).parse(
        "recipients: 201110076346, 201110076347 ,01110076348 with text Hello there."
    )
    assert req.recipients == ["201110076346", "201110076347", "201110076348"]
    assert req.text == "Hello there"


def test_octobot_group_ids_in_text():
    req = octobot_parser(MessageKind.TEXT).parse(
        "recipients: 120363123456789012@g.us, 120363123456789013-1614@g.us text: standup"
    )
    assert req.recipients == ["120363123456789012@g.us", "120363123456789013-1614@g.us"]
    assert req.text == "standup"
