"""Range checks for generation parameters.

A rule fires only when its field is defined: ``temperature=0`` is a valid
value and is checked like any other, while ``temperature=None`` skips the
check entirely. top_p/top_k exclusivity is not checked here; the session
store keeps at most one of them defined.
"""
from __future__ import annotations

from chat_assistant.models.params import GenerationParams
from chat_assistant.utils.exceptions import ParameterRangeError

# field -> inclusive (low, high)
PARAMETER_RANGES: dict[str, tuple[float, float]] = {
    "temperature": (0, 2),
    "top_p": (0, 1),
    "top_k": (0, 20),
}


def collect_errors(params: GenerationParams) -> list[ParameterRangeError]:
    """Evaluate every range rule and return all failures."""
    errors = []
    for field, (low, high) in PARAMETER_RANGES.items():
        value = getattr(params, field)
        if value is None:
            continue
        if value < low or value > high:
            errors.append(ParameterRangeError(field, low, high, value))
    return errors


def validate(params: GenerationParams) -> None:
    """Check params before a request is sent.

    Raises:
        ParameterRangeError: For the first field outside its range.
    """
    errors = collect_errors(params)
    if errors:
        raise errors[0]
