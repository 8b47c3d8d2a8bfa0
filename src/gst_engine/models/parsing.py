"""Model construction that reports failures as engine validation errors"""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from gst_engine.exceptions import ValidationError

M = TypeVar("M", bound=BaseModel)


def validate_model(model: Type[M], data: Mapping[str, Any]) -> M:
    """
    Validate a mapping into a model

    Raises:
        ValidationError: Listing every failed field as "location: message"
    """
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as e:
        failures = e.errors()
        fields = [".".join(str(part) for part in err["loc"]) for err in failures]
        messages = [f"{loc or model.__name__}: {err['msg']}" for loc, err in zip(fields, failures)]
        raise ValidationError(
            f"Invalid {model.__name__}: {'; '.join(messages)}",
            field=fields[0] or None,
            details={"errors": messages},
        ) from e
