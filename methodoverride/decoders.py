import anyio
import dataclasses
import typing
from starlette.datastructures import Headers, UploadFile
from starlette.formparsers import FormParser, MultiPartException, MultiPartParser
from starlette.requests import HTTPConnection
from starlette.types import Message, Receive, Scope

from methodoverride.exceptions import BodyReadError, FormDecodeError, MethodOverrideError

__all__ = ["BodyRecorder", "FormDecoder", "Found", "Missing", "Failed", "FieldResult"]


@dataclasses.dataclass(frozen=True)
class Found:
    """The field is present. The value may be an empty string or an uploaded file."""

    value: typing.Any


@dataclasses.dataclass(frozen=True)
class Missing:
    """The body carries no such field, or is not form data at all."""


@dataclasses.dataclass(frozen=True)
class Failed:
    error: MethodOverrideError


FieldResult = typing.Union[Found, Missing, Failed]


class BodyRecorder:
    """
    Remember every message taken from the server so it can be replayed to the next app.

    The replaying callable returns recorded messages first and then reads from the server.
    """

    def __init__(self, receive: Receive) -> None:
        self._receive = receive
        self.messages: list[Message] = []

    async def receive(self) -> Message:
        message = await self._receive()
        self.messages.append(message)
        return message

    def replay(self) -> Receive:
        if not self.messages:
            return self._receive

        pending = list(self.messages)

        async def receive() -> Message:
            if pending:
                return pending.pop(0)
            return await self._receive()

        return receive


def close_parsed_files(parser: FormParser | MultiPartParser) -> None:
    """Close temporary files of uploads a multipart parser created before it was interrupted."""
    for _, value in getattr(parser, "items", []):
        if isinstance(value, UploadFile):
            value.file.close()
    for file in getattr(parser, "_files_to_close_on_error", []):
        file.close()


class FormDecoder:
    urlencoded_type = "application/x-www-form-urlencoded"
    multipart_type = "multipart/form-data"

    def __init__(self, max_length: int | None = 8 * 1024**2, read_timeout: float | None = 30) -> None:
        self.max_length = max_length
        self.read_timeout = read_timeout

    def get_media_type(self, scope: Scope) -> str:
        """
        Return the lower-cased media type of the request body.

        A POST without a content type is treated as url-encoded form data.
        """
        content_type = Headers(scope=scope).get("content-type", "")
        media_type = content_type.split(";", 1)[0].strip().lower()
        if not media_type and scope.get("method") == "POST":
            return self.urlencoded_type
        return media_type

    def supports(self, media_type: str) -> bool:
        return media_type in (self.urlencoded_type, self.multipart_type)

    async def decode_form_field(self, scope: Scope, receive: Receive, key: str) -> FieldResult:
        """
        Look up a single form field in the request body.

        Never raises for malformed, oversized, truncated or slow bodies. Those are returned as `Failed`.
        """
        media_type = self.get_media_type(scope)
        if not self.supports(media_type):
            return Missing()

        parser = self.create_parser(HTTPConnection(scope, receive), receive, media_type)
        try:
            with anyio.fail_after(self.read_timeout):
                form_data = await parser.parse()
        except TimeoutError:
            close_parsed_files(parser)
            return Failed(BodyReadError(f"Did not complete reading request body after {self.read_timeout} seconds."))
        except MethodOverrideError as ex:
            close_parsed_files(parser)
            return Failed(ex)
        except (MultiPartException, ValueError, LookupError) as ex:
            close_parsed_files(parser)
            return Failed(FormDecodeError(str(ex)))

        try:
            if key not in form_data:
                return Missing()
            return Found(form_data[key])
        finally:
            await form_data.close()

    def create_parser(
        self, connection: HTTPConnection, receive: Receive, media_type: str
    ) -> FormParser | MultiPartParser:
        stream = self.stream(receive, self.max_length)
        if media_type == self.multipart_type:
            return MultiPartParser(connection.headers, stream)
        return FormParser(connection.headers, stream)

    async def stream(self, receive: Receive, max_size: int | None) -> typing.AsyncGenerator[bytes, None]:
        bytes_read = 0
        while True:
            message = await receive()
            if message["type"] == "http.request":
                body = message.get("body", b"")
                bytes_read += len(body)
                if max_size is not None and bytes_read > max_size:
                    raise FormDecodeError(f"Request is too large. Read: {bytes_read}, limit {max_size}.")

                if body:
                    yield body
                if not message.get("more_body", False):
                    break
            elif message["type"] == "http.disconnect":
                raise BodyReadError("Client disconnected before the request body was read.")
        yield b""
