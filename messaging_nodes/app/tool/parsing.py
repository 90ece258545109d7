import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Pattern, Sequence, Tuple

from messaging_nodes.base.adapter_base import InputParser
from messaging_nodes.base.errors import ParseError
from messaging_nodes.base.models import ParsedRequest
from messaging_nodes.config.logger import logging

logger = logging.getLogger(__name__)


def _p(expr: str) -> Pattern[str]:
    return re.compile(expr, re.IGNORECASE)


# Natural-language patterns. Agents rely on these exact shapes.
CHAT_NUMBER = _p(r"chat Number\s*:\s*(\d+)")
RECIPIENTS = _p(r"recipients\s*:\s*([\w@.\-]+(?:\s*,\s*[\w@.\-]+)*)")
MESSAGE_WILL_BE = _p(r"message will be\s*(.+)$")
WITH_TEXT = _p(r"with text\s*(.+?)(?:\.|$)")
TEXT_COLON = _p(r"text\s*:\s*(.+?)(?:\.|$)")
FILE_PATH = _p(r"file path is\s*([^\s]+)")
IMAGE_PATH = _p(r"image path is\s*([^\s]+)")
CAPTION = _p(r"caption\s*(.+?)(?:\.|$)")
GROUP_PICTURE = _p(r"group picture(?: url)? is\s*([^\s]+)")
WHOLE_INPUT = re.compile(r"^\s*(.+?)\s*$", re.DOTALL)


def normalize_recipient(recipient: str) -> str:
    """Prefix every identifier that starts with 0 with the country code digit 2."""
    parts = [p.strip() for p in recipient.split(",")]
    return ",".join("2" + p if p.startswith("0") else p for p in parts if p)


@dataclass(frozen=True)
class FieldSpec:
    """
    One ParsedRequest field: where to look for it in JSON and which
    natural-language patterns can recover it.
    """

    name: str
    json_keys: Tuple[str, ...]
    patterns: Tuple[Pattern[str], ...] = ()
    required: bool = True


@dataclass(frozen=True)
class PatternInputParser(InputParser):
    fields: Sequence[FieldSpec]
    usage: str
    normalize: bool = field(default=True)

    def parse(self, raw: str) -> ParsedRequest:
        if not isinstance(raw, str):
            raw = json.dumps(raw)

        values = self._from_json(raw)
        if values is None:
            values = self._from_text(raw)
            if values is None:
                raise ParseError(
                    f"Input didn't match expected formats. Input should either be {self.usage}"
                )
            logger.debug("Parsed input with natural-language patterns")
        else:
            logger.debug("Parsed input as JSON")

        recipient = values.get("recipient")
        if recipient and self.normalize:
            values["recipient"] = normalize_recipient(recipient)

        return ParsedRequest(**values)

    def _from_json(self, raw: str) -> Optional[Dict[str, str]]:
        try:
            data = json.loads(raw)
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None

        values: Dict[str, str] = {}
        for spec in self.fields:
            value = _first_json_value(data, spec.json_keys)
            if value is None:
                if spec.required:
                    return None
                continue
            values[spec.name] = value
        return values

    def _from_text(self, raw: str) -> Optional[Dict[str, str]]:
        values: Dict[str, str] = {}
        for spec in self.fields:
            value = _first_match(raw, spec.patterns)
            if value is None:
                if spec.required:
                    return None
                continue
            values[spec.name] = value
        return values


def _first_json_value(data: Dict[str, Any], keys: Tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if value is None or value == "" or isinstance(value, (dict, list)):
            continue
        if isinstance(value, bool):
            continue
        return str(value)
    return None


def _first_match(raw: str, patterns: Tuple[Pattern[str], ...]) -> Optional[str]:
    for pattern in patterns:
        m = pattern.search(raw)
        if m and m.group(1).strip():
            return m.group(1).strip()
    return None
