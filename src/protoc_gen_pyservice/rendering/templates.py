"""Jinja2 sources for generated servicer modules.

``MODULE_TEMPLATE`` lays out a whole file; the per-shape method templates
are rendered separately and spliced into the class body, indented by the
module template. Annotations are postponed in generated modules, so a
method named like an imported module (``grpc``, ``Iterator``) cannot break the
annotations of the methods after it.
"""

from __future__ import annotations

from protoc_gen_pyservice.shapes import RPCShape

HEADER = "# Code initially generated by protoc-gen-pyservice"

MODULE_TEMPLATE = '''\
{{ header }}
# source: {{ source_file_name }}

from __future__ import annotations

{% if streaming %}
from collections.abc import Iterator

{% endif %}
import grpc

{% for module, alias in imports %}
import {{ module }} as {{ alias }}
{% endfor %}
{% for alias_name, alias_type in stream_aliases %}

{{ alias_name }} = Iterator[{{ alias_type }}]
{% endfor %}


class {{ class_name }}({{ servicer_base }}):
    """{{ class_name }} implements the {{ full_service_name }} service."""
{% for block in methods %}

{{ block | indent(4, first=True) }}
{% endfor %}
'''

UNARY_TEMPLATE = '''\
def {{ name }}(self, request: {{ input }}, context: grpc.ServicerContext) -> {{ output }}:
    """{{ name }} sends a single response for a single request."""
    # TODO: Do something with the request.
    _ = request

    # TODO: Send a meaningful response.
    return {{ output }}()
'''

SERVER_STREAMING_TEMPLATE = '''\
def {{ name }}(self, request: {{ input }}, context: grpc.ServicerContext) -> {{ stream_name }}:
    """{{ name }} streams responses for a single request."""
    # TODO: Do something with the request.
    _ = request

    # TODO: Stream meaningful responses.
    for _ in range({{ send_count }}):
        yield {{ output }}()
'''

CLIENT_STREAMING_TEMPLATE = '''\
def {{ name }}(
    self, request_iterator: {{ stream_name }}, context: grpc.ServicerContext
) -> {{ output }}:
    """{{ name }} sends a single response for a stream of requests."""
    for request in request_iterator:
        # TODO: Do something with the request.
        _ = request

    # TODO: Send a meaningful response.
    return {{ output }}()
'''

BIDI_STREAMING_TEMPLATE = '''\
def {{ name }}(
    self, request_iterator: {{ stream_name }}, context: grpc.ServicerContext
) -> Iterator[{{ output }}]:
    """{{ name }} streams a response for each request of a stream."""
    for request in request_iterator:
        # TODO: Do something with the request.
        _ = request

        # TODO: Stream a meaningful response.
        yield {{ output }}()
'''

METHOD_TEMPLATES: dict[RPCShape, str] = {
    RPCShape.UNARY: UNARY_TEMPLATE,
    RPCShape.SERVER_STREAMING: SERVER_STREAMING_TEMPLATE,
    RPCShape.CLIENT_STREAMING: CLIENT_STREAMING_TEMPLATE,
    RPCShape.BIDI_STREAMING: BIDI_STREAMING_TEMPLATE,
}
