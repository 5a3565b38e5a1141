"""Decoding of signed assertion documents (model, serial, ...).

An assertion is a block of headers, an optional body, and a signature, each
separated by a blank line:

    type: model
    authority-id: canonical
    required-snaps:
      - core
    device-key:
        AcZrBFaFwYABAvCgEOrrLA6F...
    sign-key-sha3-384: 8B3Wmemeu3H6i4dEV4Q85Q4g...

    AcLBcwQAAQoAHRYhBMbX+t6MbKGH5C3nnLZW7+q0g6EL...

Headers hold strings, lists ("- item" lines) and maps ("key: value" lines),
indented by two spaces; multi-line strings are indented by four. The body is
present only when the "body-length" header is non-zero.

Signatures are carried as opaque bytes and never verified here.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime

_ENTRY = re.compile(r"^([a-z](?:-?[a-z0-9])*):(?: (.*))?$")
_INT = re.compile(r"^(?:0|[1-9][0-9]*)$")

KNOWN_TYPES = frozenset(
    {
        "account",
        "account-key",
        "account-key-request",
        "base-declaration",
        "device-session-request",
        "model",
        "repair",
        "serial",
        "serial-request",
        "snap-build",
        "snap-declaration",
        "snap-developer",
        "snap-revision",
        "store",
        "system-user",
        "validation",
        "validation-set",
    }
)


class AssertionFormatError(ValueError):
    """Raised when assertion content cannot be decoded."""


@dataclass(frozen=True)
class Assertion:
    """A decoded assertion. Equality compares every decoded part; hashing uses the raw content."""

    headers: dict[str, object]
    body: bytes
    signature: bytes
    content: bytes = field(repr=False)

    def __hash__(self) -> int:
        return hash(self.content)

    def header(self, name: str) -> object | None:
        """Return a header value, or None when absent."""
        return self.headers.get(name)

    def _str_header(self, name: str) -> str:
        value = self.headers.get(name, "")
        return value if isinstance(value, str) else ""

    @property
    def type(self) -> str:
        """Assertion type name (e.g. "model")."""
        return self._str_header("type")

    @property
    def authority_id(self) -> str:
        """Account that signed the assertion."""
        return self._str_header("authority-id")

    @property
    def sign_key_sha3_384(self) -> str:
        """Digest of the signing key."""
        return self._str_header("sign-key-sha3-384")

    @property
    def revision(self) -> int:
        """Assertion revision, 0 when the header is absent."""
        return int(self._str_header("revision") or 0)

    def encode(self) -> bytes:
        """Return the exact bytes this assertion was decoded from."""
        return self.content


class _Timestamped(Assertion):
    """Headers shared by device identity assertions."""

    @property
    def brand_id(self) -> str:
        """Brand account the device belongs to."""
        return self._str_header("brand-id")

    @property
    def model(self) -> str:
        """Model name within the brand."""
        return self._str_header("model")

    @property
    def timestamp(self) -> datetime:
        """Time the assertion was issued."""
        return datetime.fromisoformat(self._str_header("timestamp"))


class Model(_Timestamped):
    """Model assertion: what a device is and which snaps it must carry."""

    @property
    def series(self) -> str:
        return self._str_header("series")

    @property
    def architecture(self) -> str:
        return self._str_header("architecture")

    @property
    def base(self) -> str:
        return self._str_header("base")

    @property
    def gadget(self) -> str:
        return self._str_header("gadget")

    @property
    def kernel(self) -> str:
        return self._str_header("kernel")

    @property
    def grade(self) -> str:
        return self._str_header("grade")

    @property
    def required_snaps(self) -> list[str]:
        value = self.headers.get("required-snaps", [])
        return [item for item in value if isinstance(item, str)] if isinstance(value, list) else []


class Serial(_Timestamped):
    """Serial assertion: binds a device serial to its device key."""

    @property
    def serial(self) -> str:
        return self._str_header("serial")

    @property
    def device_key(self) -> str:
        """Encoded public device key, line breaks removed."""
        return self._str_header("device-key").replace("\n", "")

    @property
    def device_key_sha3_384(self) -> str:
        return self._str_header("device-key-sha3-384")


_TYPES: dict[str, type[Assertion]] = {"model": Model, "serial": Serial}


def decode(data: bytes) -> Assertion:
    """Decode a single assertion.

    Raises:
        AssertionFormatError: Content is malformed or lacks mandatory headers.

    """
    head_end = data.find(b"\n\n")
    if head_end == -1:
        msg = "assertion content/signature separator not found"
        raise AssertionFormatError(msg)
    try:
        head = data[:head_end].decode()
    except UnicodeDecodeError as e:
        msg = "assertion headers are not valid UTF-8"
        raise AssertionFormatError(msg) from e

    headers = _parse_map(head.split("\n"), 0)
    _check_headers(headers)

    rest = data[head_end + 2 :]
    body = b""
    body_length = int(str(headers.get("body-length", "0")))  # validated by _check_headers
    if body_length > 0:
        if rest[body_length : body_length + 2] != b"\n\n":
            msg = "missing content/signature separator after body"
            raise AssertionFormatError(msg)
        body, rest = rest[:body_length], rest[body_length + 2 :]

    signature = rest.removesuffix(b"\n")
    if not signature:
        msg = "empty assertion signature"
        raise AssertionFormatError(msg)

    cls = _TYPES.get(str(headers["type"]), Assertion)
    return cls(headers=headers, body=body, signature=signature, content=data)


def _check_headers(headers: dict[str, object]) -> None:
    """Validate the headers every assertion must carry."""
    for name in ("type", "authority-id", "sign-key-sha3-384"):
        value = headers.get(name)
        if not isinstance(value, str) or not value:
            msg = f'assertion: "{name}" header is mandatory'
            raise AssertionFormatError(msg)
    if headers["type"] not in KNOWN_TYPES:
        msg = f"unknown assertion type: {headers['type']!r}"
        raise AssertionFormatError(msg)
    for name in ("revision", "body-length"):
        value = headers.get(name)
        if value is not None and (not isinstance(value, str) or not _INT.match(value)):
            msg = f'assertion: "{name}" header is not an integer: {value!r}'
            raise AssertionFormatError(msg)
    if headers["type"] in _TYPES:
        timestamp = headers.get("timestamp")
        if not isinstance(timestamp, str) or not timestamp:
            msg = f'assertion {headers["type"]}: "timestamp" header is mandatory'
            raise AssertionFormatError(msg)
        try:
            datetime.fromisoformat(timestamp)
        except ValueError as e:
            msg = f'assertion {headers["type"]}: "timestamp" header is not an RFC3339 date: {timestamp!r}'
            raise AssertionFormatError(msg) from e


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _block_end(lines: list[str], start: int, parent_indent: int) -> int:
    """Return the index past the lines indented deeper than parent_indent."""
    end = start
    while end < len(lines) and lines[end] and _indent(lines[end]) > parent_indent:
        end += 1
    return end


def _parse_value(lines: list[str], parent_indent: int, name: str) -> object:
    """Parse an indented block as a list, a map, or a multi-line string."""
    if not lines:
        msg = f"header {name!r} has no value"
        raise AssertionFormatError(msg)
    indent = _indent(lines[0])
    first = lines[0][indent:]
    if first == "-" or first.startswith("- "):
        return _parse_list(lines, indent, name)
    if indent - parent_indent < 4 and _ENTRY.match(first):
        return _parse_map(lines, indent)
    if any(_indent(line) < indent for line in lines):
        msg = f"inconsistent indentation in header {name!r}"
        raise AssertionFormatError(msg)
    return "\n".join(line[indent:] for line in lines)


def _parse_map(lines: list[str], indent: int) -> dict[str, object]:
    result: dict[str, object] = {}
    i = 0
    while i < len(lines):
        line = lines[i]
        match = _ENTRY.match(line[indent:]) if _indent(line) == indent else None
        if match is None:
            msg = f"invalid header line: {line!r}"
            raise AssertionFormatError(msg)
        name, inline = match.group(1), match.group(2)
        if name in result:
            msg = f"repeated header: {name!r}"
            raise AssertionFormatError(msg)
        end = _block_end(lines, i + 1, indent)
        if inline is None:
            result[name] = _parse_value(lines[i + 1 : end], indent, name)
        elif end != i + 1:
            msg = f"header {name!r} has both an inline and an indented value"
            raise AssertionFormatError(msg)
        else:
            result[name] = inline
        i = end
    return result


def _parse_list(lines: list[str], indent: int, name: str) -> list[object]:
    items: list[object] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        item = line[indent:]
        if _indent(line) != indent or not (item == "-" or item.startswith("- ")):
            msg = f"invalid list item in header {name!r}: {line!r}"
            raise AssertionFormatError(msg)
        end = _block_end(lines, i + 1, indent)
        if item == "-":
            items.append(_parse_value(lines[i + 1 : end], indent, name))
        elif end != i + 1:
            msg = f"list item in header {name!r} has both an inline and an indented value"
            raise AssertionFormatError(msg)
        else:
            items.append(item[2:])
        i = end
    return items
