from messaging_nodes.base.adapter_base import (
    InputParser,
    OutcomeEncoder,
    ProviderInvoker,
    RequestValidator,
)
from messaging_nodes.base.base_tool import BaseTool
from messaging_nodes.base.errors import MessagingError, ValidationError
from messaging_nodes.base.models import AdapterConfig, Outcome
from messaging_nodes.config.logger import logging

logger = logging.getLogger(__name__)


class ToolAdapter(BaseTool):
    """
    One messaging tool: parse -> validate -> send -> encode.

    The adapter keeps no state between calls; `config` is frozen and shared by
    concurrent invocations. Every invocation ends in exactly one Outcome, and
    `invoke` is the only place it is turned into the agent-visible string.
    """

    def __init__(
        self,
        config: AdapterConfig,
        parser: InputParser,
        validator: RequestValidator,
        invoker: ProviderInvoker,
        encoder: OutcomeEncoder,
    ):
        self.config = config
        self.parser = parser
        self.validator = validator
        self.invoker = invoker
        self.encoder = encoder

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def description(self) -> str:
        return self.config.description

    async def invoke(self, raw_input: str) -> str:
        outcome = await self.execute(raw_input)
        return outcome.to_agent_string()

    async def execute(self, raw_input: str) -> Outcome:
        cfg = self.config
        try:
            req = self.parser.parse(raw_input)
            logger.info("%s: parsed request for %s", self.name, req.recipient or "webhook")

            result = await self.validator.validate(req, cfg)
            if not result.ok:
                return self.encoder.failure(
                    ValidationError(result.message, reason=result.reason)
                )

            response = await self.invoker.send(req, cfg, result.media)
            outcome = self.encoder.encode(response, req, cfg)
        except MessagingError as e:
            logger.warning("%s failed: %s", self.name, e.message)
            return self.encoder.failure(e)
        except Exception as e:
            logger.exception("%s failed unexpectedly", self.name)
            return self.encoder.failure(MessagingError(str(e) or type(e).__name__))

        if outcome.success:
            logger.info("%s: sent (status=%s)", self.name, response.status)
        else:
            logger.warning("%s: provider rejected: %s", self.name, outcome.error)
        return outcome
