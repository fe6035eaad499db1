from starlette.types import Message, Receive, Scope, Send


class ListErrorSink:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def write(self, text: str) -> None:
        self.lines.append(text)


class CapturingApp:
    """An ASGI app that remembers what it was called with and reads the whole body."""

    def __init__(self) -> None:
        self.scope: Scope | None = None
        self.messages: list[Message] = []

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        self.scope = scope
        while True:
            message = await receive()
            self.messages.append(message)
            if message["type"] != "http.request" or not message.get("more_body", False):
                break

    @property
    def body(self) -> bytes:
        return b"".join(message.get("body", b"") for message in self.messages)


def make_receive(*messages: Message) -> Receive:
    pending = list(messages)

    async def receive() -> Message:
        return pending.pop(0)

    return receive


async def noop_send(message: Message) -> None:
    pass
