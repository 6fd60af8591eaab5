# mcpclient

A small client for the Model Context Protocol (MCP). It speaks JSON-RPC 2.0
through a transport that you supply. It starts the connection, negotiates a
session with the server, and then lists, reads and calls the server's
resources, prompts and tools.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `mcpclient.protocol`: the JSON-RPC message types (`JSONRPCRequest`,
  `JSONRPCNotification`, `JSONRPCResponse`, `JSONRPCError`) and the abstract
  `Transport` base class.
- `mcpclient.client`: the `Client` class and its exceptions.

## Transports

A transport subclasses `mcpclient.protocol.Transport` and implements:

- `start()` and `close()`
- `send_request(request)`: takes a `JSONRPCRequest` and returns a
  `JSONRPCResponse`
- `send_notification(notification)`: takes a `JSONRPCNotification`
- `set_notification_handler(handler)`: registers the callable that receives
  notifications sent by the server

The `session_id` property returns an empty string by default. A transport that
has sessions overrides it.

`JSONRPCResponse.from_dict`, `JSONRPCError.from_dict` and
`JSONRPCNotification.from_dict` build messages from decoded JSON. Each raises
`ValueError` when the input is malformed. `JSONRPCRequest.to_dict` and
`JSONRPCNotification.to_dict` produce the dictionaries to encode. They leave
out `params` when it is `None`.

## Usage

```python
from mcpclient.client import Client, NotInitializedError, ServerError

client = Client(my_transport)
client.start()

client.on_notification(lambda n: print("notification:", n.method))

result = client.initialize(
    protocol_version="2025-03-26",
    client_info={"name": "example-client", "version": "1.0.0"},
    capabilities={},
)
print(result["serverInfo"]["name"])

client.ping()

tools = client.list_tools()
for tool in tools["tools"]:
    print(tool["name"])

reply = client.call_tool("test-tool", {"param1": "value1"})
print(reply["content"])

resources = client.list_resources()
contents = client.read_resource("test://resource")
client.subscribe("test://resource")
client.unsubscribe("test://resource")

prompt = client.get_prompt("test-prompt", {"arg1": "value"})

client.set_level("info")
client.complete(
    {"type": "ref/prompt", "name": "test-prompt"},
    {"name": "test-arg", "value": "test-value"},
)

client.close()
```

`Client` is also a context manager. On entry it calls `start()` and on exit it
calls `close()`:

```python
with Client(my_transport) as client:
    client.initialize("2025-03-26", {"name": "example-client", "version": "1.0.0"})
```

The constructor takes two keyword-only options:

- `client_capabilities`: a mapping stored on the client
- `session=True`: marks the client as initialized, for a transport that is
  already bound to an existing session

Results come back as plain dictionaries, decoded from the server's JSON.

### Listing and pagination

`list_tools`, `list_prompts`, `list_resources` and `list_resource_templates`
follow `nextCursor` until the server returns no more pages. They return the
first page's result with the items of every page combined and `nextCursor`
removed. To fetch one page at a time, use the `*_by_page` variants with an
explicit cursor.

### Notifications

Handlers registered with `on_notification` receive every notification the
transport delivers once `start()` has been called. They run in the order they
were registered.

### Errors

Every error derives from `ClientError`:

- `NotInitializedError`: a request other than `initialize` was sent before
  the session was initialized
- `TransportError`: the transport raised while sending a request, or while
  sending the `notifications/initialized` notification
- `ServerError`: the server answered with a JSON-RPC error. It carries the
  server's `message`, `code` and `data`.

`ClientError` itself is raised in three cases: when `start()` or `close()` is
called without a transport, and when a result that should be an object is not
one.

### Inspecting state

`is_initialized`, `server_capabilities`, `client_capabilities`, `session_id`
and `transport` are read-only properties. `server_capabilities` holds the
capabilities the server returned from `initialize`.

## What this package does not do

The package contains no ready-made transports. There is no stdio subprocess
transport, no HTTP, streamable-HTTP or SSE transport, and no in-process
connection to a server. It also has no OAuth support and no MCP server. You
must supply a `Transport` implementation that carries the messages.