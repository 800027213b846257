"""Pydantic models for generation (sampling) parameters.

GenerationParams is the value sent with every completion request.
ParamsPatch is a partial update applied by the session store; only the
fields explicitly passed to it are applied, so ``ParamsPatch(top_p=None)``
clears ``top_p`` while ``ParamsPatch()`` is a no-op.

Range checks live in ParameterValidator, not here: a session may hold an
out-of-range value until the user tries to submit with it.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from chat_assistant.utils.exceptions import ParameterFormatError, UnknownParameterError

PARAMETER_NAMES = ("temperature", "top_p", "top_k", "reasoning_effort")

# Leading base-10 integer; anything after it is ignored
LEADING_INT = re.compile(r"[+-]?[0-9]+")


class ReasoningEffort(str, Enum):
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GenerationParams(BaseModel):
    """Sampling configuration for one completion request.

    Attributes:
        temperature: Sampling temperature, valid range [0, 2].
        top_p: Nucleus sampling mass, valid range [0, 1].
        top_k: Top-k cutoff, valid range [0, 20].
        reasoning_effort: Requested reasoning depth.
    """
    model_config = ConfigDict(frozen=True)

    temperature: float | None = Field(default=1.0, description="Sampling temperature")
    top_p: float | None = Field(default=None, description="Nucleus sampling probability mass")
    top_k: int | None = Field(default=None, description="Top-k token cutoff")
    reasoning_effort: ReasoningEffort | None = Field(default=ReasoningEffort.LOW, description="Reasoning effort")

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the wire, omitting unset fields."""
        return self.model_dump(mode="json", exclude_none=True)


class ParamsPatch(BaseModel):
    """Partial update for GenerationParams."""
    model_config = ConfigDict(extra="forbid")

    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    reasoning_effort: ReasoningEffort | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were explicitly set, in parameter order."""
        return {
            name: getattr(self, name)
            for name in PARAMETER_NAMES
            if name in self.model_fields_set
        }

    @classmethod
    def from_form(cls, name: str, value: str) -> "ParamsPatch":
        """Build a single-field patch from a raw form control value.

        An empty string means "unset" for the numeric parameters. top_k
        keeps only its leading base-10 integer, so "7.8" and "7abc" give 7
        and "1e3" gives 1.

        Raises:
            UnknownParameterError: If ``name`` is not a parameter.
            ParameterFormatError: If ``value`` cannot be parsed.
        """
        if name not in PARAMETER_NAMES:
            raise UnknownParameterError(name)

        value = value.strip()
        if name == "reasoning_effort":
            if not value:
                return cls(reasoning_effort=None)
            try:
                return cls(reasoning_effort=ReasoningEffort(value.lower()))
            except ValueError as e:
                raise ParameterFormatError(name, value) from e

        if not value:
            return cls(**{name: None})

        if name == "top_k":
            match = LEADING_INT.match(value)
            if match is None:
                raise ParameterFormatError(name, value)
            return cls(top_k=int(match.group()))

        try:
            number = float(value)
        except ValueError as e:
            raise ParameterFormatError(name, value) from e
        if number != number or number in (float("inf"), float("-inf")):
            raise ParameterFormatError(name, value)

        return cls(**{name: number})
