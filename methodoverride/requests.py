from starlette.requests import HTTPConnection
from starlette.requests import Request as BaseRequest

from methodoverride.methods import ORIGINAL_METHOD_SCOPE_KEY

__all__ = ["Request", "get_original_method"]


def get_original_method(connection: HTTPConnection) -> str | None:
    """Get the method the client actually sent, if it was overridden."""
    return connection.scope.get(ORIGINAL_METHOD_SCOPE_KEY)


class Request(BaseRequest):
    @property
    def original_method(self) -> str:
        """Method before override. Same as `method` when no override happened."""
        return get_original_method(self) or self.method

    @property
    def method_overridden(self) -> bool:
        return ORIGINAL_METHOD_SCOPE_KEY in self.scope
