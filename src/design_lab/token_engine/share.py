"""Share codec for configuration links.

A shareable configuration is serialized as compact JSON with the wire
names ``theme``, ``palette``, ``font``, ``darkMode``, ``baseFontSize``
and ``typeScale``, then base64 encoded so it fits in a URL query
parameter. Decoding never raises: anything unreadable yields an empty
partial configuration.
"""

import base64
import binascii
import json
from typing import Any, Dict
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit
import logging

from .errors import DecodeFailure
from .schema import PartialConfig, ShareableConfig

logger = logging.getLogger(__name__)

QUERY_PARAMETER = "config"

WIRE_FIELDS = ('theme', 'palette', 'font', 'darkMode', 'baseFontSize', 'typeScale')


def _compact_number(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def encode(config: ShareableConfig) -> str:
    """Encode a configuration as URL-safe base64 JSON.

    Args:
        config: Configuration to share

    Returns:
        Encoded text suitable for the ``config`` query parameter
    """
    payload = {key: _compact_number(value) for key, value in config.model_dump(by_alias=True).items()}
    raw = json.dumps(payload, separators=(',', ':')).encode('utf-8')
    return base64.urlsafe_b64encode(raw).decode('ascii')


def _decode_payload(text: Any) -> Dict[str, Any]:
    """Decode text into the raw JSON object.

    Raises:
        DecodeFailure: If the text is not base64 encoded JSON object
    """
    if not isinstance(text, str):
        raise DecodeFailure(f"Expected text, got {type(text).__name__}")

    cleaned = text.strip().replace('-', '+').replace('_', '/')
    cleaned += '=' * (-len(cleaned) % 4)
    try:
        raw = base64.b64decode(cleaned, validate=True)
        data = json.loads(raw.decode('utf-8'))
    except (binascii.Error, ValueError, RecursionError) as e:
        raise DecodeFailure(f"Unreadable share payload: {e}") from e

    if not isinstance(data, dict):
        raise DecodeFailure(f"Share payload is a {type(data).__name__}, not an object")
    return data


def decode(text: Any) -> PartialConfig:
    """Decode shared text into a partial configuration.

    Only fields present in the payload are set; nothing is defaulted and
    values are not checked against the catalog.

    Args:
        text: Encoded configuration

    Returns:
        PartialConfig, empty when the text cannot be decoded
    """
    try:
        data = _decode_payload(text)
    except DecodeFailure as e:
        logger.warning(f"Error loading shared config: {e}")
        return PartialConfig()

    return PartialConfig.model_validate({key: data[key] for key in WIRE_FIELDS if key in data})


def build_share_url(base_url: str, config: ShareableConfig) -> str:
    """Attach the encoded configuration to a URL, replacing any previous one."""
    parts = urlsplit(base_url)
    query = [(key, value) for key, values in parse_qs(parts.query).items()
             for value in values if key != QUERY_PARAMETER]
    query.append((QUERY_PARAMETER, encode(config)))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def config_from_url(url: str) -> PartialConfig:
    """Read the ``config`` query parameter of a URL.

    A missing parameter gives an empty partial configuration, the same
    as a malformed one.
    """
    values = parse_qs(urlsplit(url).query).get(QUERY_PARAMETER)
    if not values:
        return PartialConfig()
    # '+' from standard base64 arrives as a space after query decoding
    return decode(values[0].replace(' ', '+'))
