"""Shared helpers for the service layer."""

from typing import Any, Type, TypeVar

import pydantic

from contentplanner.errors import ValidationError

RequestT = TypeVar("RequestT", bound=pydantic.BaseModel)


def coerce_request(model: Type[RequestT], data: Any) -> RequestT:
    """
    Accept either an already-validated model or raw data.

    Raw data that fails validation raises the planner's ValidationError,
    with the pydantic error chained.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid {model.__name__}: {e}", value=data) from e
