import builtins
from typing import Any, Dict, Iterable, List, NoReturn, Optional

import hologram

from datastore.dataclass_schema import StrEnum


def validator_error_message(exc):
    """Given a hologram.ValidationError (which is basically a
    jsonschema.ValidationError), return the relevant parts as a string
    """
    if not isinstance(exc, hologram.ValidationError):
        return str(exc)
    path = "[%s]" % "][".join(map(repr, exc.relative_path))
    return 'at path {}: {}'.format(path, exc.message)


class ValidationErrorCode(StrEnum):
    PropertyValidation = 'PROPERTY_VALIDATION'
    DisallowedProperty = 'DISALLOWED_PROPERTY'


class Exception(builtins.Exception):
    CODE = -32000
    MESSAGE = "Data Store Error"

    def data(self):
        # if overriding, make sure the result is json-serializable.
        return {
            'type': self.__class__.__name__,
            'message': str(self),
        }


class InvalidArgumentException(TypeError, Exception):
    """Raised when a store method is called with the wrong shape of input.
    This is a programming error, not bad data: callers should not catch it.
    """
    CODE = 10003
    MESSAGE = "Invalid argument"


class ValidationError(Exception):
    """A single property value was rejected, either by the store's
    allowed/disallowed property policy or by a validator/setter override.
    """
    CODE = 10005
    MESSAGE = "Validation Error"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: str = ValidationErrorCode.PropertyValidation,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = {} if details is None else details
        self.code = code

    def __str__(self):
        return self.message

    def __reduce__(self):
        return (ValidationError, (self.message, self.details, self.code))

    def data(self):
        result = Exception.data(self)
        result.update({
            'details': self.details,
            'code': str(self.code),
        })
        return result


class MultipleValidationError(Exception):
    """Raised once at the end of a batch `set` when one or more properties in
    the batch could not be set.

    `errors` holds every exception the batch collected, in input order.
    `validation_errors` only holds the `ValidationError` instances among
    them, and `other_errors` everything else.
    """
    CODE = 10006
    MESSAGE = "Multiple Validation Errors"

    def __init__(self, errors: Iterable[builtins.Exception]) -> None:
        self.errors: List[builtins.Exception] = list(errors)
        self.validation_errors: List[ValidationError] = [
            e for e in self.errors if isinstance(e, ValidationError)
        ]
        self.other_errors: List[builtins.Exception] = [
            e for e in self.errors if not isinstance(e, ValidationError)
        ]
        super().__init__(
            '{} validation errors'.format(len(self.errors))
        )

    def __reduce__(self):
        return (MultipleValidationError, (self.errors,))

    def data(self):
        result = Exception.data(self)
        result['errors'] = [
            e.data() if isinstance(e, Exception)
            else {'type': type(e).__name__, 'message': str(e)}
            for e in self.errors
        ]
        return result


def raise_invalid_argument(msg) -> NoReturn:
    raise InvalidArgumentException(msg)


def raise_validation_error(
    msg, details=None, code=ValidationErrorCode.PropertyValidation
) -> NoReturn:
    raise ValidationError(msg, details, code)


def raise_not_a_store(type_name='DataStore') -> NoReturn:
    raise_invalid_argument(
        'data_store argument must be an instance of {}'.format(type_name)
    )
