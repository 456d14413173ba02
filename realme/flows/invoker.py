"""
Flow definition: prompt template + input/output schema + invocation policy.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Generic, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from realme.core.dependency import get_generator
from realme.core.exceptions import InputValidationError, OutputValidationError
from realme.flows.ai_providers.base import StructuredGenerator
from realme.flows.retry import DEFAULT_POLICY, InvocationState, RetryPolicy, invoke_with_policy

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


def _first_error(exc: ValidationError) -> tuple[str, Optional[str]]:
    """Return a readable message and the dotted field path of the first validation error."""
    err = exc.errors()[0]
    ctx_error = (err.get("ctx") or {}).get("error")
    message = str(ctx_error) if ctx_error else err["msg"]
    field = ".".join(str(p) for p in err.get("loc", ())) or None
    return message, field


class Flow(Generic[InputT, OutputT]):
    """A single named AI-backed operation."""

    def __init__(
        self,
        name: str,
        input_model: Type[InputT],
        output_model: Type[OutputT],
        render: Callable[[InputT], str],
        short_circuit: Optional[Callable[[InputT], Optional[OutputT]]] = None,
        policy: RetryPolicy = DEFAULT_POLICY,
    ):
        self.name = name
        self.input_model = input_model
        self.output_model = output_model
        self.render = render
        self.short_circuit = short_circuit
        self.policy = policy

    def output_json_schema(self) -> Dict[str, Any]:
        return {"name": self.name, "schema": self.output_model.model_json_schema(by_alias=True)}

    def parse_input(self, data: Union[InputT, Mapping[str, Any]]) -> InputT:
        if isinstance(data, self.input_model):
            return data
        try:
            return self.input_model.model_validate(data)
        except ValidationError as e:
            message, field = _first_error(e)
            raise InputValidationError(message, field=field) from e

    def parse_output(self, raw: Any) -> OutputT:
        try:
            return self.output_model.model_validate(raw)
        except ValidationError as e:
            raise OutputValidationError(f"{self.name} output does not match schema: {e}") from e

    async def invoke(
        self,
        data: Union[InputT, Mapping[str, Any]],
        generator: Optional[StructuredGenerator] = None,
        *,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_transition: Optional[Callable[[InvocationState, int], None]] = None,
    ) -> OutputT:
        """
        Validate the input, then generate and validate output under the retry policy.

        Raises:
            InputValidationError: Input rejected; no generation is attempted
            Exception: The last attempt's error once retries are exhausted
        """
        payload = self.parse_input(data)

        if self.short_circuit is not None:
            shortcut = self.short_circuit(payload)
            if shortcut is not None:
                logger.info(f"{self.name}: short-circuited without generation")
                return shortcut

        if generator is None:
            generator = get_generator()

        prompt = self.render(payload)
        schema = self.output_json_schema()

        async def _attempt() -> OutputT:
            raw = await generator.generate(prompt, schema)
            return self.parse_output(raw)

        return await invoke_with_policy(
            _attempt,
            policy or self.policy,
            name=self.name,
            sleep=sleep,
            on_transition=on_transition,
        )
