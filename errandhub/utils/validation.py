from marshmallow import ValidationError
from errandhub.utils.exceptions import InvalidArgument

def load_or_raise(schema, data):
    """Deserialize ``data`` with ``schema``; validation failures become InvalidArgument."""
    try:
        return schema.load(data or {})
    except ValidationError as err:
        raise InvalidArgument("Request validation failed", details=err.messages)
