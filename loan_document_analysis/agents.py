from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol, Type, Union

from pydantic import BaseModel
from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIChatModel

logger = logging.getLogger(__name__)


class ModelInvoker(Protocol):
    """
    Outbound capability used by the analyzer: a structured-output model call.

    Implementations return an instance of ``output_schema`` (or data that
    validates against it), ``None`` when the model produced nothing, or raise.
    """

    async def invoke(
        self,
        prompt_text: str,
        input_schema: Type[BaseModel],
        output_schema: Type[BaseModel],
        input: BaseModel,
    ) -> Optional[Any]:
        ...


class PydanticAIInvoker:
    """
    ModelInvoker backed by a pydanticAI agent.

    The output schema is bound as the agent's ``output_type`` so the provider is
    asked for schema-constrained JSON and pydanticAI validates the reply.
    """

    def __init__(self, model_name: str = "gpt-4o", model: Union[Model, str, None] = None):
        self.model_name = model_name
        self.model = model
        self._agents: Dict[Type[BaseModel], Agent[None, Any]] = {}

    def agent_for(self, output_schema: Type[BaseModel]) -> Agent[None, Any]:
        agent = self._agents.get(output_schema)
        if agent is None:
            # Built lazily: OpenAIChatModel needs credentials at construction time.
            model = self.model if self.model is not None else OpenAIChatModel(self.model_name)
            agent = Agent(model=model, output_type=output_schema)
            self._agents[output_schema] = agent
        return agent

    async def invoke(
        self,
        prompt_text: str,
        input_schema: Type[BaseModel],
        output_schema: Type[BaseModel],
        input: BaseModel,
    ) -> Optional[Any]:
        logger.debug("Submitting %d-character prompt for %s", len(prompt_text), output_schema.__name__)
        result = await self.agent_for(output_schema).run(prompt_text)
        return result.output
