from typing import Any

from ..structs import RequestSpec
from ..utils import assemble_url
from .base import TransportStrategy


class EchoTransport(TransportStrategy):
    """
    Local transport that never touches the network.

    The assembled resource string (query string included) is the raw
    response, and every response is reported as a success.
    """

    name = "echo"

    def execute(self, request: RequestSpec) -> Any:
        return assemble_url(request.resource, request.payload)

    def finalize(self, response: Any) -> Any:
        response.okay(True)
        response.message('empty')
        response.message_type('success')
        return response
