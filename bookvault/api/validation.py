"""Request validation decorator.

@validate_request parses the JSON body into the Pydantic model named by the
view function's annotation and passes it in. Path parameters (anything
present in request.view_args) are passed through unchanged.

Example:
```python
@books_bp.put("/<book_id>")
@validate_request
def update_book(book_id: str, data: BookUpdate):
    ...
```

Pydantic errors are converted to the project's ValidationError with a
details dict:
- model: schema class name
- received: the submitted body, with password fields redacted
- errors: [{"field", "message", "expected_type"}, ...]
"""

import inspect
from functools import wraps

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..exceptions import ValidationError

REDACTED = "***"


def _redact(body: dict) -> dict:
    return {
        key: REDACTED if "password" in str(key).lower() else value
        for key, value in body.items()
    }


def _format_errors(exc: PydanticValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in exc.errors(include_url=False, include_context=False, include_input=False)
    ]


def _read_body() -> dict:
    body = request.get_json(silent=True)
    if body is None and request.form:
        body = request.form.to_dict()
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise ValidationError(
            "Request body must be a JSON object",
            {"received_type": type(body).__name__}
        )
    return body


def validate_request(f):
    """
    Decorator that validates the request body against a Pydantic model.

    Raises:
        TypeError: At decoration time if the function has no parameters or
            its first parameter is unannotated; at request time if the body
            parameter is not annotated with a BaseModel subclass
        ValidationError: If the body fails validation
    """
    signature = inspect.signature(f)
    params = list(signature.parameters.values())

    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")
    if params[0].annotation is inspect.Parameter.empty:
        raise TypeError(f"First parameter of {f.__name__} lacks a type annotation")

    @wraps(f)
    def wrapper(*args, **kwargs):
        view_args = request.view_args or {}

        for param in params:
            if param.name in view_args or param.name in kwargs:
                continue

            model = param.annotation
            if not (inspect.isclass(model) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Parameter '{param.name}' of {f.__name__} must be annotated "
                    f"with a Pydantic BaseModel subclass"
                )

            body = _read_body()
            try:
                kwargs[param.name] = model(**body)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Invalid request data",
                    {
                        "model": model.__name__,
                        "received": _redact(body),
                        "errors": _format_errors(e),
                    }
                ) from e

        return f(*args, **kwargs)

    return wrapper
