# atlaskit

A small toolkit for building services. It has four parts:

- **`atlaskit.bloxid`**: typed, versioned resource identifiers such as
  `blox0.infra.host.us-com-1.ivmfiurrgizsaiba`. An identifier holds an entity
  domain, an entity type, an optional realm and a unique part. The unique part
  comes from one of three schemes: random (the default), extrinsic (an ID you
  supply) or hashid (a non-negative integer hidden behind a salted hash).
- **`atlaskit.auth.jwt`**: reads a JWT from request metadata and returns
  claims from it, such as the account ID.
- **`atlaskit.errors`**: an error container that collects a status code, a
  message, per-target details and per-field errors, plus conditions and a
  mapper that turn arbitrary exceptions into containers by following a chain
  of rules. Ready-made mappings cover PostgreSQL constraint violations and
  request validation errors.
- **`atlaskit.cmode`**: a tiny WSGI application for reading and changing
  runtime options, such as a logger's level, over HTTP.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Typed resource IDs

Modules: `atlaskit.bloxid.v0`, `atlaskit.bloxid.schemes`,
`atlaskit.bloxid.hashids`.

Generate an identifier with an extrinsic ID, then parse it back:

```python
from atlaskit.bloxid.schemes import ExtrinsicID
from atlaskit.bloxid.v0 import new_v0, parse_v0

bid = new_v0(
    "",
    entity_domain="infra",
    entity_type="host",
    realm="us-com-1",
    schemer=ExtrinsicID("123"),
)
print(str(bid))        # blox0.infra.host.us-com-1.ivmfiurrgizsaiba

parsed = parse_v0(str(bid), "")
print(parsed.decoded)  # 123
print(parsed.scheme)   # extrinsic
```

`new_v0` parses its first argument unless it is blank, in which case it
calls `generate_v0`. Without a schemer, the unique part is 20 random bytes,
base32-encoded into 32 lower case characters, and `decoded` holds their hex
form. `RandomEncodedID(encoded)` rebuilds an identifier from the unique part
of an earlier random one.

For the hashid scheme, pass a `HashIDInt64` schemer and a salt. The same salt
is needed to parse the identifier back:

```python
from atlaskit.bloxid.schemes import HashIDInt64

bid = new_v0(
    "",
    entity_domain="infra",
    entity_type="host",
    realm="us-com-1",
    salt="test",
    schemer=HashIDInt64(1),
)
parsed = parse_v0(str(bid), "test")
assert parsed.decoded == "1"
assert parsed.hash_id_int64 == 1
```

`V0.hash_id_int64` is `-1` for identifiers of any other scheme.
`validate_v0` checks the shape of a serialized identifier without decoding it.
The `Hashids` class in `atlaskit.bloxid.hashids` is a general encoder and
decoder of non-negative integers and can be used on its own.

Invalid input raises a specific exception, all derived from `BloxIDError`
(itself a `ValueError`): `V0PartsError`, `InvalidVersionError`,
`InvalidEntityDomainError`, `InvalidEntityTypeError`,
`InvalidUniqueIDLenError`, `IDEmptyError`, `EmptyExtrinsicIDError`,
`InvalidExtrinsicIDError`, `EmptyRandomEncodedIDError`,
`InvalidSizeRandomEncodedIDError`, `InvalidAlphabetRandomEncodedIDError`,
`InvalidRandomEncodedIDError`, `InvalidIDError`, `InvalidSaltError` and
`HashidsError`.

## JWT claims

Metadata is a mapping of header names to a value or a list of values, or an
iterable of `(name, value)` pairs; header names match regardless of case.

```python
import jwt

from atlaskit.auth.jwt import get_account_id, get_jwt_field

encoded_jwt = jwt.encode({"account_id": "acct-1", "groups": ["a", "b"]}, "secret", algorithm="HS256")
metadata = {"authorization": ["Bearer " + encoded_jwt]}

print(get_account_id(metadata))          # acct-1
print(get_jwt_field(metadata, "groups")) # [a b]
```

`get_account_id` looks for the `account_id` claim, then `AccountID`.
`get_jwt_field_with_token_type` reads a token sent with another scheme than
`Bearer`, and `auth_from_metadata` returns the raw credentials.

Without a `keyfunc` the token is decoded but its signature is not checked;
only do this when something earlier in the stack has already verified it.
Otherwise pass a callable `keyfunc(header, claims)` that returns the key to
verify with. Failures raise `MissingTokenError`, `MissingFieldError` or
`InvalidAssertionError`, all derived from `AuthError`.

## Error containers and mapping

```python
from atlaskit.errors.conditions import cond_has_prefix
from atlaskit.errors.container import Code, Container, init_container, new_mapping

err = (
    Container(Code.INVALID_ARGUMENT, "<general error>")
    .with_detail(Code.INVALID_ARGUMENT, "target", "<specific error %d>", 1)
    .with_field("foo", "bar")
)
status = err.grpc_status()   # Status(code, message, details): fields first, then details

c = init_container()
c.add_mapping(
    new_mapping(cond_has_prefix("pg_sql:"), Container(Code.INVALID_ARGUMENT, "bad input")),
)
mapped = c.map(None, Exception("pg_sql: constraint failed"))  # the "bad input" container
```

A `Container` is an exception. Messages are formatted with printf-style verbs
(`%s`, `%v`, `%d`, `%q`, ...). `new` resets it; `set`, `with_detail(s)` and
`with_field(s)` mark it as set (`is_set`); `if_set` changes the general error
only when it was set before.

`new_mapping(src, dst)` takes a `MapCond` (or an exception, matched by equal
message) and a `MapFunc` (or an exception, returned as is; `None` means
"skip"). `Mapper.map` returns the result of the first mapping that applies,
or an unknown-error container. Conditions in `atlaskit.errors.conditions`:
`cond_eq`, `cond_re_match`, `cond_has_prefix`, `cond_has_suffix`,
`cond_not`, `cond_and`, `cond_or`.

`atlaskit.errors.context` keeps a container in a request context (a plain
mapping): `new_context`, `from_context`, `detail`, `details`, `field`,
`fields`, `new`, `set_error`, `if_set`, `error` and `map_error`.

`atlaskit.errors.interceptor.unary_server_interceptor(*map_funcs)` returns a
callable `interceptor(ctx, req, info, handler)`. It calls
`handler(ctx, req)` with a context holding a fresh container; containers and
errors that have a `grpc_status()` method are re-raised unchanged, other
errors are mapped and the result raised, and a mapping to `None` makes the
call return `None`.

Ready-made mappings:

- `atlaskit.errors.mappers.pgerrors`: the `PgError` exception (`code`,
  `constraint`, `detail`, `message`, `severity`), conditions
  `cond_pg_error`, `cond_code_eq`, `cond_constraint_eq`, `to_map_func`, and
  `new_foreign_key_mapping`, `new_restrict_mapping`, `new_not_null_mapping`,
  `new_unique_mapping`.
- `atlaskit.errors.mappers.validation`: the `ValidationError` exception,
  `get_validation_error`, a request-validating `unary_server_interceptor()`
  (it calls `req.validate()` before the handler), conditions
  `cond_validation`, `cond_field_eq`, `cond_reason_eq`, `to_map_func`, and
  `default_mapping`.

## Runtime control mode

```python
import logging
from wsgiref.simple_server import make_server

from atlaskit.cmode.cmode import CMode
from atlaskit.cmode.loglevel import LogLevelOption

app = CMode(logging.getLogger("cmode"), LogLevelOption(logging.getLogger()))
make_server("", 8080, app).serve_forever()
```

- `GET /cmode` prints usage.
- `GET /cmode/values` lists the current values.
- `POST /cmode/values?loglevel=debug` changes a value. Valid levels are
  `panic`, `fatal`, `error`, `warning`, `info`, `debug` and `trace`.

`CMode.handle(method, path, query)` serves one request without a server and
returns a `Reply` (status and plain text body). Your own options subclass
`CModeOpt`, setting `name`, `description` and `valid_values` and
implementing `get` and `parse_and_set`.

## What the package does not do

- It does not depend on or plug into a gRPC library. The interceptors are
  plain callables, and `Code`, `Status` and `StatusError` are the package's
  own types; wiring them into a real server is up to you.
- It has no command-line tool and no server of its own; `CMode` is a WSGI
  application to be hosted by any WSGI server.
- It does not forward request metadata to outgoing calls or add the account
  ID to request loggers.