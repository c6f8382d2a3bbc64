"""JSON key-casing adapter.

Rewrites the field names of a serialized payload from their normal
capitalized form (``clientId``, ``ClientSecret``) to the lowercase,
underscore-separated form some endpoints expect (``client_id``,
``client_secret``).

The transform is purely textual and knows nothing about the schema:

1. serialize the value as compact JSON,
2. find every quoted token followed by a colon,
3. drop spaces inside the token,
4. insert ``_`` at each lowercase-run-to-uppercase boundary,
5. lowercase the token.

Boundaries are handled one regex match at a time, so acronym runs are not
split word-by-word: ``vpcID`` becomes ``vpc_id`` and ``myHTTPServer``
becomes ``my_httpserver``. The accounts API expects exactly this form.
"""

import dataclasses
import json
import re
from typing import Any

_KEY_MATCH = re.compile(r'"([\w\s]+)":', re.ASCII)
_WORD_BARRIER = re.compile(r"([a-z]+)([A-Z])")


def _convert_key(match: re.Match[str]) -> str:
    no_space = match.group(0).replace(" ", "")
    return _WORD_BARRIER.sub(r"\1_\2", no_space).lower()


def convert_keys(marshalled: str) -> str:
    """Rewrite every JSON field name in marshalled to lowercase-underscore form.

    Args:
        marshalled: JSON text as produced by a normal serializer.

    Returns:
        The same text with field-name tokens rewritten.
    """
    return _KEY_MATCH.sub(_convert_key, marshalled)


def _plain(value: Any) -> Any:
    """Reduce value to something json.dumps understands."""
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        # pydantic models serialize with their wire aliases
        return model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


class ConventionalMarshaller:
    """Wraps a value so that it serializes with conventional field names.

    Usage::

        body = ConventionalMarshaller(credentials).marshal_json()
    """

    def __init__(self, value: Any):
        self.value = value

    def marshal_json(self) -> str:
        """Serialize the wrapped value and convert its field names.

        Raises:
            TypeError: If the wrapped value is not JSON serializable.
        """
        marshalled = json.dumps(
            _plain(self.value), separators=(",", ":"), ensure_ascii=False
        )
        return convert_keys(marshalled)


def conventional_json(value: Any) -> str:
    """Shorthand for ConventionalMarshaller(value).marshal_json()."""
    return ConventionalMarshaller(value).marshal_json()
