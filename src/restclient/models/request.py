from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic_core import to_json

from .enums import Method, ParameterType


@dataclass
class Parameter:
    """A single name/value pair and the part of the HTTP request it targets.

    For ``REQUEST_BODY`` parameters ``content_type`` holds the body's media type.
    """

    name: Optional[str]
    value: Any
    type: ParameterType
    content_type: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


@dataclass
class RestRequest:
    """Describes one HTTP call relative to the client's base URL.

    ``resource`` may contain ``{name}`` placeholders that are filled from
    ``URL_SEGMENT`` parameters. The executor reads a request but never adds
    to it, so one instance can be executed more than once.
    """

    resource: str = ""
    method: Union[Method, str] = Method.GET
    parameters: list[Parameter] = field(default_factory=list)
    timeout: Union[int, float] | None = None

    def add_parameter(
        self,
        name: Optional[str],
        value: Any,
        type: ParameterType = ParameterType.GET_OR_POST,
        content_type: Optional[str] = None,
    ) -> "RestRequest":
        self.parameters.append(
            Parameter(name=name, value=value, type=type, content_type=content_type)
        )
        return self

    def add_header(self, name: str, value: str) -> "RestRequest":
        return self.add_parameter(name, value, ParameterType.HTTP_HEADER)

    def add_query_parameter(self, name: str, value: Any) -> "RestRequest":
        return self.add_parameter(name, value, ParameterType.QUERY_STRING)

    def add_url_segment(self, name: str, value: Any) -> "RestRequest":
        return self.add_parameter(name, value, ParameterType.URL_SEGMENT)

    def add_cookie(self, name: str, value: str) -> "RestRequest":
        return self.add_parameter(name, value, ParameterType.COOKIE)

    def add_body(
        self, body: Union[str, bytes], content_type: str = "text/plain"
    ) -> "RestRequest":
        """Set the raw request body, replacing any previous body."""
        self.parameters = [
            p for p in self.parameters if p.type != ParameterType.REQUEST_BODY
        ]
        return self.add_parameter(
            content_type, body, ParameterType.REQUEST_BODY, content_type=content_type
        )

    def add_json_body(self, obj: Any) -> "RestRequest":
        """Serialize ``obj`` (dicts, lists, pydantic models, dataclasses) as the JSON body."""
        return self.add_body(to_json(obj), content_type="application/json")

    def get_parameter(
        self, name: str, type: ParameterType
    ) -> Optional[Parameter]:
        """Return the first parameter of ``type`` whose name matches case-insensitively."""
        lowered = name.lower()
        for parameter in self.parameters:
            if (
                parameter.type == type
                and parameter.name is not None
                and parameter.name.lower() == lowered
            ):
                return parameter
        return None
